"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from rfq_compliance.config import Settings
from rfq_compliance.errors import ConfigurationError
from rfq_compliance.pipeline.orchestrator import ComplianceOrchestrator


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_orchestrator(request: Request) -> ComplianceOrchestrator:
    """The orchestrator built around the shared model client at startup."""
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise ConfigurationError("Model client is not initialized")
    return orchestrator


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
OrchestratorDep = Annotated[ComplianceOrchestrator, Depends(get_orchestrator)]
