"""API routes for the compliance checker."""

from uuid import uuid4

from fastapi import APIRouter, Query, Request

from rfq_compliance import __version__
from rfq_compliance.api.dependencies import OrchestratorDep, SettingsDep
from rfq_compliance.api.ingress import parse_comparison_request
from rfq_compliance.models.requests import ComparisonMode, TextComparisonRequest
from rfq_compliance.models.responses import (
    ErrorResponse,
    FreeformComplianceResponse,
    HealthResponse,
    StructuredComplianceResponse,
)
from rfq_compliance.utils.logging import bind_request_context


router = APIRouter(tags=["Compliance"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing, invalid or unreadable input"},
    500: {"model": ErrorResponse, "description": "Model or internal failure"},
}


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@router.post(
    "/compliance-check",
    response_model=FreeformComplianceResponse | StructuredComplianceResponse,
    responses=ERROR_RESPONSES,
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {"schema": TextComparisonRequest.model_json_schema()},
                "multipart/form-data": {
                    "schema": {
                        "type": "object",
                        "properties": {
                            "rfq": {"type": "string", "format": "binary"},
                            "proposal": {"type": "string", "format": "binary"},
                        },
                    }
                },
            },
            "required": True,
        }
    },
)
@router.post("/check-compliance", include_in_schema=False)
@router.post("/generate", include_in_schema=False)
async def check_compliance(
    request: Request,
    orchestrator: OrchestratorDep,
    settings: SettingsDep,
    mode: ComparisonMode = Query(default=ComparisonMode.FREEFORM),
) -> FreeformComplianceResponse | StructuredComplianceResponse:
    """Compare an RFQ and a Proposal for compliance.

    Args:
        request: Raw request; JSON ``{rfq, proposal}`` or a multipart form.
        orchestrator: Injected compliance orchestrator.
        settings: Injected application settings.
        mode: ``freeform`` for prose, ``structured`` for a findings array.

    Returns:
        The model's analysis.
    """
    bind_request_context(request_id=uuid4().hex[:12], path=request.url.path)

    comparison = await parse_comparison_request(request, mode, settings.max_upload_bytes)
    result = await orchestrator.handle(comparison)

    if result.findings is not None:
        return StructuredComplianceResponse(analysis=result.findings)
    return FreeformComplianceResponse(result=result.text)
