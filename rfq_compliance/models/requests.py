"""Request models for the compliance checker."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from rfq_compliance.models.documents import Document


class ComparisonMode(str, Enum):
    """How the model is asked to answer."""

    FREEFORM = "freeform"
    STRUCTURED = "structured"


class ComparisonRequest(BaseModel):
    """An RFQ / Proposal pair to compare.

    Either document may be missing at construction time; the orchestrator
    rejects such requests before any extraction or model call.
    """

    rfq: Document | None = Field(default=None)
    proposal: Document | None = Field(default=None)
    mode: ComparisonMode = Field(default=ComparisonMode.FREEFORM)

    model_config = {"frozen": True}

    @property
    def is_upload(self) -> bool:
        """True when any supplied document came from a file part."""
        return any(doc is not None and doc.is_upload for doc in (self.rfq, self.proposal))


class TextComparisonRequest(BaseModel):
    """JSON body accepted by the compliance endpoint."""

    rfq: str = Field(..., description="RFQ document text")
    proposal: str = Field(..., description="Proposal document text")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "rfq": "The solution must support TLS 1.2.",
                    "proposal": "We support TLS 1.2 and 1.3.",
                }
            ]
        }
    }


class CompliancePrompt(BaseModel):
    """The composed request sent to the model collaborator."""

    text: str = Field(..., description="Full instruction text including both documents")
    mode: ComparisonMode = Field(...)
    response_schema: dict[str, Any] | None = Field(
        default=None,
        description="Output schema hint for structured mode",
    )

    model_config = {"frozen": True}
