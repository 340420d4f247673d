"""Tests for the model client."""

import asyncio
from types import SimpleNamespace

import pytest

from rfq_compliance.config import Settings
from rfq_compliance.errors import ConfigurationError, NoUsableExportError, UpstreamError
from rfq_compliance.llm.client import ModelClient, build_model_client
from rfq_compliance.llm.prompts import PromptBuilder
from rfq_compliance.models.requests import ComparisonMode
from tests.fakes import FakeGenerativeModel


def configure_style_sdk():
    """Mimics google.generativeai: module-level configure plus GenerativeModel."""
    configured = {}

    def configure(api_key):
        configured["api_key"] = api_key

    return SimpleNamespace(configure=configure, GenerativeModel=FakeGenerativeModel), configured


class ClientStyleSDK:
    """Mimics a client constructor taking the key and handing out models."""

    def __init__(self, api_key):
        self.api_key = api_key

    def get_generative_model(self, model_name):
        return FakeGenerativeModel(model_name=model_name)


class TestFromSdk:
    """Tests for building a client from an SDK namespace."""

    def test_configure_style_sdk(self):
        sdk, configured = configure_style_sdk()

        client = ModelClient.from_sdk(sdk, api_key="key-123", model_name="gemini-test")

        assert configured["api_key"] == "key-123"
        assert client.model_name == "gemini-test"

    def test_client_style_sdk(self):
        client = ModelClient.from_sdk({"GoogleGenerativeAI": ClientStyleSDK}, "key", "gemini-test")
        assert client.model_name == "gemini-test"

    def test_client_without_model_accessor(self):
        sdk = {"GoogleGenerativeAI": lambda api_key: SimpleNamespace()}

        with pytest.raises(ConfigurationError, match="get_generative_model"):
            ModelClient.from_sdk(sdk, "key", "gemini-test")

    def test_sdk_without_constructor(self):
        with pytest.raises(NoUsableExportError):
            ModelClient.from_sdk({"configure": print}, "key", "gemini-test")

    def test_model_without_generate_content(self):
        with pytest.raises(ConfigurationError):
            ModelClient(SimpleNamespace(), model_name="x")


class TestBuildModelClient:
    """Tests for startup construction from settings."""

    def test_unimportable_sdk(self):
        settings = Settings(
            _env_file=None,
            google_api_key="key",
            genai_sdk_module="rfq_compliance_no_such_sdk",
        )

        with pytest.raises(ConfigurationError, match="Failed to import"):
            build_model_client(settings)


class TestGenerate:
    """Tests for ModelClient.generate."""

    def test_freeform_call(self, fake_model, model_client):
        prompt = PromptBuilder().build("rfq", "proposal", ComparisonMode.FREEFORM)

        response = asyncio.run(model_client.generate(prompt))

        assert response is fake_model.reply
        assert fake_model.calls == [(prompt.text, {})]

    def test_structured_call_sends_schema(self, fake_model, model_client):
        prompt = PromptBuilder().build("rfq", "proposal", ComparisonMode.STRUCTURED)

        asyncio.run(model_client.generate(prompt))

        _, kwargs = fake_model.calls[0]
        config = kwargs["generation_config"]
        assert config["response_mime_type"] == "application/json"
        assert config["response_schema"] == prompt.response_schema

    def test_sdk_error_becomes_upstream_error(self, fake_model, model_client):
        fake_model.reply = RuntimeError("quota exceeded")
        prompt = PromptBuilder().build("rfq", "proposal")

        with pytest.raises(UpstreamError, match="quota exceeded"):
            asyncio.run(model_client.generate(prompt))

    def test_timeout(self):
        slow_model = FakeGenerativeModel(delay=0.5)
        client = ModelClient(slow_model, model_name="slow", timeout_seconds=0.05)
        prompt = PromptBuilder().build("rfq", "proposal")

        with pytest.raises(UpstreamError, match="timed out"):
            asyncio.run(client.generate(prompt))
