"""Response models for the compliance checker."""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from rfq_compliance.models.requests import ComparisonMode


class ComplianceStatus(str, Enum):
    """Fixed status set for a compliance finding."""

    COMPLIANT = "COMPLIANT"
    PARTIALLY_COMPLIANT = "PARTIALLY COMPLIANT"
    NON_COMPLIANT = "NON-COMPLIANT"

    @classmethod
    def normalize(cls, value: str) -> "ComplianceStatus":
        """Map loose spellings such as ``partially_compliant`` onto a status."""
        key = re.sub(r"[\s_\-]+", " ", value.strip().upper())
        for status in cls:
            if re.sub(r"[\s_\-]+", " ", status.value) == key:
                return status
        raise ValueError(f"Unknown compliance status: {value!r}")


class ComplianceFinding(BaseModel):
    """One judgment linking an RFQ requirement to proposal evidence."""

    requirement_summary: str = Field(..., description="Short summary of the RFQ requirement")
    proposal_excerpt: str = Field(..., description="Supporting excerpt from the proposal")
    compliance_status: ComplianceStatus = Field(...)
    actionable_insight: str | None = Field(
        default=None,
        description="What to change; expected when status is not COMPLIANT",
    )

    model_config = {"extra": "ignore"}

    @field_validator("compliance_status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> Any:
        if isinstance(value, str):
            return ComplianceStatus.normalize(value)
        return value


class ComplianceResult(BaseModel):
    """Outcome of one comparison."""

    mode: ComparisonMode
    text: str = Field(..., description="Normalized model text")
    findings: list[ComplianceFinding] | None = Field(
        default=None,
        description="Parsed findings, structured mode only",
    )
    processing_time_ms: float = Field(default=0.0, ge=0.0)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class FreeformComplianceResponse(BaseModel):
    """Free-form compliance analysis."""

    result: str


class StructuredComplianceResponse(BaseModel):
    """Structured compliance analysis."""

    success: Literal[True] = True
    analysis: list[ComplianceFinding]


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    error: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
