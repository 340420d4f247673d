"""RFQ Compliance - compares an RFQ and a Proposal using a hosted generative model."""

__version__ = "1.0.0"

from rfq_compliance.models.requests import ComparisonMode, ComparisonRequest
from rfq_compliance.models.responses import ComplianceResult
from rfq_compliance.pipeline.orchestrator import ComplianceOrchestrator

__all__ = [
    "ComplianceOrchestrator",
    "ComparisonMode",
    "ComparisonRequest",
    "ComplianceResult",
]
