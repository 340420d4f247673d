"""Tests for the prompt builder."""

import pytest

from rfq_compliance.llm.prompts import PromptBuilder, PromptTemplates
from rfq_compliance.models.requests import ComparisonMode


RFQ = "Must support TLS 1.2"
PROPOSAL = "We support TLS 1.2 and 1.3"


class TestPromptBuilder:
    """Tests for PromptBuilder."""

    @pytest.mark.parametrize("mode", list(ComparisonMode))
    def test_build_is_deterministic(self, mode):
        first = PromptBuilder().build(RFQ, PROPOSAL, mode)
        second = PromptBuilder().build(RFQ, PROPOSAL, mode)

        assert first.text.encode("utf-8") == second.text.encode("utf-8")
        assert first == second

    def test_freeform_prompt(self):
        prompt = PromptBuilder().build(RFQ, PROPOSAL, ComparisonMode.FREEFORM)

        assert prompt.mode == ComparisonMode.FREEFORM
        assert prompt.response_schema is None
        assert prompt.text.startswith("Compare the following RFQ and Proposal documents")
        assert f"RFQ:\n{RFQ}\n\nProposal:\n{PROPOSAL}" in prompt.text
        assert prompt.text.endswith("Provide a detailed compliance analysis.")

    def test_structured_prompt_carries_schema(self):
        prompt = PromptBuilder().build(RFQ, PROPOSAL, ComparisonMode.STRUCTURED)

        assert RFQ in prompt.text
        assert PROPOSAL in prompt.text
        assert "Return ONLY a JSON array" in prompt.text
        for field in ("requirement_summary", "proposal_excerpt", "compliance_status", "actionable_insight"):
            assert field in prompt.text
        assert prompt.response_schema == PromptTemplates.RESPONSE_SCHEMA
        assert prompt.response_schema["items"]["properties"]["compliance_status"]["enum"] == [
            "COMPLIANT",
            "PARTIALLY COMPLIANT",
            "NON-COMPLIANT",
        ]

    def test_braces_in_documents_are_kept_verbatim(self):
        rfq = 'Config must accept {"tls": "1.2"} and {placeholder}'
        prompt = PromptBuilder().build(rfq, PROPOSAL)

        assert rfq in prompt.text

    def test_large_documents_are_not_truncated(self):
        rfq = "requirement " * 50_000
        prompt = PromptBuilder().build(rfq, PROPOSAL)

        assert rfq in prompt.text
