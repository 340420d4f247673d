"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from rfq_compliance import __version__
from rfq_compliance.api.routes import router
from rfq_compliance.config import Settings, get_settings
from rfq_compliance.errors import ComplianceCheckError, ConfigurationError
from rfq_compliance.llm.client import ModelClient, build_model_client
from rfq_compliance.loaders.registry import DocumentExtractor
from rfq_compliance.pipeline.orchestrator import ComplianceOrchestrator
from rfq_compliance.utils.logging import get_logger, setup_logging


logger = get_logger(__name__)


def build_orchestrator(settings: Settings, model_client: ModelClient) -> ComplianceOrchestrator:
    """Wire the orchestrator around an already-built model client."""
    return ComplianceOrchestrator(
        model_client,
        extractor=DocumentExtractor(temp_dir=settings.upload_temp_dir),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build the shared model client once; a configuration error aborts startup."""
    settings: Settings = app.state.settings
    if app.state.orchestrator is None:
        try:
            client = build_model_client(settings)
        except ConfigurationError as e:
            logger.critical("Startup failed", error=e.message)
            raise
        app.state.orchestrator = build_orchestrator(settings, client)

    logger.info("Starting RFQ Compliance API", model=settings.gemini_model)
    yield
    logger.info("Shutting down RFQ Compliance API")


async def compliance_error_handler(request: Request, exc: ComplianceCheckError) -> JSONResponse:
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        "Request failed",
        path=request.url.path,
        status_code=exc.status_code,
        error_type=type(exc).__name__,
        error=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning(
        "HTTP error",
        path=request.url.path,
        status_code=exc.status_code,
        error=exc.detail,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    logger.warning("Invalid request parameters", path=request.url.path, error=message)
    return JSONResponse(status_code=400, content={"error": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc)})


def create_app(
    settings: Settings | None = None,
    model_client: ModelClient | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings; loaded from the environment if None.
        model_client: Prebuilt model client; built from settings at startup if None.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, json_format=settings.log_as_json)

    app = FastAPI(
        title="RFQ Compliance API",
        description="Compares an RFQ and a Proposal for compliance using a hosted generative model",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.orchestrator = (
        build_orchestrator(settings, model_client) if model_client is not None else None
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ComplianceCheckError, compliance_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(router)

    @app.get("/")
    async def root():
        """Liveness probe."""
        return {
            "status": "ok",
            "message": "RFQ compliance backend is running",
            "version": __version__,
        }

    return app


# Create app instance for uvicorn
app = create_app()
