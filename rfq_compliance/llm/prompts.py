"""Prompt templates for RFQ / Proposal compliance comparison."""

from typing import Any

from langchain_core.prompts import PromptTemplate

from rfq_compliance.models.requests import ComparisonMode, CompliancePrompt
from rfq_compliance.models.responses import ComplianceStatus


STATUS_VALUES = [status.value for status in ComplianceStatus]


class PromptTemplates:
    """Collection of prompt templates for compliance comparison."""

    FREEFORM_TEMPLATE = """Compare the following RFQ and Proposal documents for compliance, gaps, and improvement suggestions.

RFQ:
{rfq}

Proposal:
{proposal}

Provide a detailed compliance analysis."""

    STRUCTURED_TEMPLATE = """Compare the following RFQ and Proposal documents for compliance, gaps, and improvement suggestions.

RFQ:
{rfq}

Proposal:
{proposal}

Instructions:
1. Identify every requirement stated in the RFQ
2. For each requirement, find the passage of the Proposal that addresses it
3. Classify compliance as exactly one of: COMPLIANT, PARTIALLY COMPLIANT, NON-COMPLIANT
4. For anything not COMPLIANT, give an actionable insight describing what the Proposal must change

Return ONLY a JSON array, with no surrounding prose or markdown, where each element has this shape:
[
    {{
        "requirement_summary": "Short summary of the RFQ requirement",
        "proposal_excerpt": "Relevant excerpt from the Proposal, or an empty string if none",
        "compliance_status": "COMPLIANT | PARTIALLY COMPLIANT | NON-COMPLIANT",
        "actionable_insight": "What to change (omit or leave empty when COMPLIANT)"
    }}
]"""

    RESPONSE_SCHEMA: dict[str, Any] = {
        "type": "ARRAY",
        "items": {
            "type": "OBJECT",
            "properties": {
                "requirement_summary": {"type": "STRING"},
                "proposal_excerpt": {"type": "STRING"},
                "compliance_status": {"type": "STRING", "enum": STATUS_VALUES},
                "actionable_insight": {"type": "STRING"},
            },
            "required": ["requirement_summary", "proposal_excerpt", "compliance_status"],
        },
    }

    @classmethod
    def get_template(cls, mode: ComparisonMode) -> str:
        """Get the raw template for a comparison mode."""
        if mode == ComparisonMode.STRUCTURED:
            return cls.STRUCTURED_TEMPLATE
        return cls.FREEFORM_TEMPLATE

    @classmethod
    def get_prompt_template(cls, mode: ComparisonMode) -> PromptTemplate:
        """Get a PromptTemplate for a comparison mode."""
        return PromptTemplate.from_template(cls.get_template(mode))


class PromptBuilder:
    """Composes the single instruction sent to the model.

    Output depends only on the two texts and the mode, so identical inputs
    always yield byte-identical prompts. Documents are never truncated.
    """

    def __init__(self) -> None:
        self._templates = {mode: PromptTemplates.get_prompt_template(mode) for mode in ComparisonMode}

    def build(
        self,
        rfq_text: str,
        proposal_text: str,
        mode: ComparisonMode = ComparisonMode.FREEFORM,
    ) -> CompliancePrompt:
        text = self._templates[mode].format(rfq=rfq_text, proposal=proposal_text)
        schema = PromptTemplates.RESPONSE_SCHEMA if mode == ComparisonMode.STRUCTURED else None
        return CompliancePrompt(text=text, mode=mode, response_schema=schema)
