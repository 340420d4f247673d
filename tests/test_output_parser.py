"""Tests for response decoding and structured output parsing."""

import json
from types import SimpleNamespace

import pytest

from rfq_compliance.errors import UpstreamError
from rfq_compliance.llm.output_parser import (
    NO_TEXT_RETURNED,
    ResponseDecoder,
    ResponseShape,
    StructuredOutputParser,
)
from rfq_compliance.models.responses import ComplianceStatus


class BlockedResponse:
    """Like a google.generativeai response whose text accessor raises."""

    def __init__(self, candidates=None):
        self.candidates = candidates or []

    @property
    def text(self):
        raise ValueError("The `response.text` quick accessor only works when the response contains a valid Part")


def candidates_payload(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class TestResponseDecoder:
    """Tests for ResponseDecoder."""

    def test_plain_string(self):
        decoded = ResponseDecoder().decode("analysis")
        assert decoded.shape == ResponseShape.PLAIN_TEXT
        assert decoded.text == "analysis"

    def test_text_attribute(self):
        decoded = ResponseDecoder().decode(SimpleNamespace(text="analysis"))
        assert decoded.text == "analysis"

    def test_text_accessor(self):
        decoded = ResponseDecoder().decode(SimpleNamespace(text=lambda: "from accessor"))
        assert decoded.shape == ResponseShape.PLAIN_TEXT
        assert decoded.text == "from accessor"

    def test_wrapped_response(self):
        raw = SimpleNamespace(response=SimpleNamespace(text=lambda: "wrapped"))
        assert ResponseDecoder().decode(raw).text == "wrapped"

    def test_candidates_mapping(self):
        decoded = ResponseDecoder().decode(candidates_payload("from parts"))
        assert decoded.shape == ResponseShape.CANDIDATES
        assert decoded.text == "from parts"

    def test_candidates_attributes(self):
        part = SimpleNamespace(text="from objects")
        raw = SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])

        assert ResponseDecoder().decode(raw).text == "from objects"

    def test_raising_accessor_falls_back_to_candidates(self):
        part = SimpleNamespace(text="fallback")
        raw = BlockedResponse([SimpleNamespace(content=SimpleNamespace(parts=[part]))])

        decoded = ResponseDecoder().decode(raw)

        assert decoded.shape == ResponseShape.CANDIDATES
        assert decoded.text == "fallback"

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            {},
            SimpleNamespace(text=""),
            BlockedResponse(),
            {"candidates": []},
            {"candidates": [{"content": {"parts": []}}]},
        ],
    )
    def test_sentinel_when_no_text(self, raw):
        decoded = ResponseDecoder().decode(raw)

        assert decoded.shape == ResponseShape.EMPTY
        assert decoded.text == NO_TEXT_RETURNED

    def test_branches_are_independent(self):
        decoder = ResponseDecoder()

        assert decoder.decode_plain_text(candidates_payload("x")) is None
        assert decoder.decode_candidates(SimpleNamespace(text="x")) is None


class TestStructuredOutputParser:
    """Tests for StructuredOutputParser."""

    def test_parse_valid_array(self, non_compliant_findings):
        findings = StructuredOutputParser().parse(json.dumps(non_compliant_findings))

        assert len(findings) == 1
        assert findings[0].compliance_status == ComplianceStatus.NON_COMPLIANT
        assert findings[0].actionable_insight

    def test_parse_json_in_markdown(self, non_compliant_findings):
        output = f"Here you go:\n\n```json\n{json.dumps(non_compliant_findings)}\n```\n"

        findings = StructuredOutputParser().parse(output)

        assert findings[0].requirement_summary == "Support TLS 1.3 only"

    def test_parse_array_with_surrounding_prose(self, non_compliant_findings):
        output = f"Findings: {json.dumps(non_compliant_findings)} Done."
        assert len(StructuredOutputParser().parse(output)) == 1

    def test_wrapped_array(self, non_compliant_findings):
        output = json.dumps({"analysis": non_compliant_findings})
        assert len(StructuredOutputParser().parse(output)) == 1

    def test_empty_array(self):
        assert StructuredOutputParser().parse("[]") == []

    def test_malformed_json(self):
        with pytest.raises(UpstreamError, match="not valid JSON"):
            StructuredOutputParser().parse("This is not valid JSON at all")

    def test_sentinel_is_rejected(self):
        with pytest.raises(UpstreamError):
            StructuredOutputParser().parse(NO_TEXT_RETURNED)

    def test_object_without_array(self):
        with pytest.raises(UpstreamError, match="not an array"):
            StructuredOutputParser().parse('{"summary": "fine"}')

    def test_unknown_status(self, non_compliant_findings):
        non_compliant_findings[0]["compliance_status"] = "MOSTLY OK"

        with pytest.raises(UpstreamError, match="Finding 0"):
            StructuredOutputParser().parse(json.dumps(non_compliant_findings))

    def test_missing_required_field(self):
        output = json.dumps([{"requirement_summary": "TLS", "compliance_status": "COMPLIANT"}])

        with pytest.raises(UpstreamError):
            StructuredOutputParser().parse(output)
