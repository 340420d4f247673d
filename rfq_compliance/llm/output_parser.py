"""Decoding of model responses and structured output parsing."""

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import ValidationError

from rfq_compliance.errors import UpstreamError
from rfq_compliance.models.responses import ComplianceFinding
from rfq_compliance.utils.logging import LoggerMixin


NO_TEXT_RETURNED = "no text returned"


class ResponseShape(str, Enum):
    """Which branch of the decoder produced the text."""

    PLAIN_TEXT = "plain_text"
    CANDIDATES = "candidates"
    EMPTY = "empty"


@dataclass(frozen=True)
class DecodedResponse:
    shape: ResponseShape
    text: str


def _field(obj: Any, name: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _first(items: Any) -> Any:
    if items is None or isinstance(items, (str, bytes, Mapping)):
        return None
    try:
        return items[0]
    except (IndexError, TypeError):
        return None


class ResponseDecoder(LoggerMixin):
    """Pull the answer text out of whatever shape the SDK returned.

    Tried in order: plain text (a string, a ``text`` attribute or a
    ``text()`` accessor), then ``candidates[0].content.parts[0].text``,
    then the ``NO_TEXT_RETURNED`` sentinel. Never raises on shape.
    """

    def decode(self, raw: Any) -> DecodedResponse:
        response = self.unwrap(raw)
        for branch in (self.decode_plain_text, self.decode_candidates):
            decoded = branch(response)
            if decoded is not None:
                return decoded
        self.log_warning("Model response contained no text")
        return DecodedResponse(ResponseShape.EMPTY, NO_TEXT_RETURNED)

    @staticmethod
    def unwrap(raw: Any) -> Any:
        """Some SDK versions wrap the payload as ``result.response``."""
        inner = _field(raw, "response")
        return raw if inner is None else inner

    def decode_plain_text(self, response: Any) -> DecodedResponse | None:
        if isinstance(response, str):
            value: Any = response
        else:
            try:
                value = _field(response, "text")
                if callable(value):
                    value = value()
            except ValueError as e:
                # google.generativeai raises when the first candidate has no text part
                self.log_debug("Text accessor unavailable", error=str(e))
                return None
        if isinstance(value, str) and value:
            return DecodedResponse(ResponseShape.PLAIN_TEXT, value)
        return None

    def decode_candidates(self, response: Any) -> DecodedResponse | None:
        candidate = _first(_field(response, "candidates"))
        part = _first(_field(_field(candidate, "content"), "parts"))
        value = _field(part, "text")
        if isinstance(value, str) and value:
            return DecodedResponse(ResponseShape.CANDIDATES, value)
        return None


class StructuredOutputParser(LoggerMixin):
    """Parser for the JSON array of compliance findings."""

    WRAPPER_KEYS = ("analysis", "findings", "results")

    def parse(self, llm_output: str) -> list[ComplianceFinding]:
        """Parse model output into findings.

        Args:
            llm_output: Normalized model text.

        Returns:
            Parsed findings, in model order.

        Raises:
            UpstreamError: If the output is not a JSON array of valid findings.
        """
        payload = self._extract_json(llm_output)

        if isinstance(payload, dict):
            for key in self.WRAPPER_KEYS:
                if isinstance(payload.get(key), list):
                    payload = payload[key]
                    break

        if not isinstance(payload, list):
            raise UpstreamError("Model returned JSON that is not an array of findings")

        findings = []
        for idx, item in enumerate(payload):
            try:
                findings.append(ComplianceFinding.model_validate(item))
            except ValidationError as e:
                self.log_warning("Invalid finding", index=idx, error=str(e))
                raise UpstreamError(
                    f"Finding {idx} does not match the compliance schema ({e.error_count()} error(s))"
                ) from e

        return findings

    def _extract_json(self, text: str) -> Any:
        """Extract JSON from text that may contain other content."""
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            pass

        # Markdown code blocks
        for pattern in (r"```json\s*([\s\S]*?)\s*```", r"```\s*([\s\S]*?)\s*```"):
            for match in re.findall(pattern, text):
                try:
                    return json.loads(match.strip())
                except json.JSONDecodeError:
                    continue

        start = text.find("[")
        end = text.rfind("]")
        if start != -1 and end > start:
            try:
                return json.loads(text[start : end + 1])
            except json.JSONDecodeError as e:
                self.log_warning("JSON array extraction failed", error=str(e))

        raise UpstreamError("Model response is not valid JSON")
