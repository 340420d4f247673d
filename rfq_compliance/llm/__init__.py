"""LLM integration modules."""

from rfq_compliance.llm.client import ModelClient, build_model_client
from rfq_compliance.llm.output_parser import (
    NO_TEXT_RETURNED,
    ResponseDecoder,
    StructuredOutputParser,
)
from rfq_compliance.llm.prompts import PromptBuilder, PromptTemplates
from rfq_compliance.llm.resolver import find_constructor, resolve

__all__ = [
    "ModelClient",
    "build_model_client",
    "NO_TEXT_RETURNED",
    "ResponseDecoder",
    "StructuredOutputParser",
    "PromptBuilder",
    "PromptTemplates",
    "find_constructor",
    "resolve",
]
