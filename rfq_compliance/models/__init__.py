"""Data models for the compliance checker."""

from rfq_compliance.models.documents import Document, DocumentOrigin
from rfq_compliance.models.requests import (
    ComparisonMode,
    ComparisonRequest,
    CompliancePrompt,
    TextComparisonRequest,
)
from rfq_compliance.models.responses import (
    ComplianceFinding,
    ComplianceResult,
    ComplianceStatus,
    ErrorResponse,
    FreeformComplianceResponse,
    HealthResponse,
    StructuredComplianceResponse,
)

__all__ = [
    "Document",
    "DocumentOrigin",
    "ComparisonMode",
    "ComparisonRequest",
    "CompliancePrompt",
    "TextComparisonRequest",
    "ComplianceFinding",
    "ComplianceResult",
    "ComplianceStatus",
    "ErrorResponse",
    "FreeformComplianceResponse",
    "HealthResponse",
    "StructuredComplianceResponse",
]
