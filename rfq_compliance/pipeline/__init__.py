"""Compliance comparison pipeline."""

from rfq_compliance.pipeline.orchestrator import ComplianceOrchestrator

__all__ = ["ComplianceOrchestrator"]
