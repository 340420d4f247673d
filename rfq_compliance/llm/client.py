"""Process-lifetime wrapper around the generative model SDK."""

import asyncio
import importlib
from functools import partial
from typing import Any

from langsmith import traceable

from rfq_compliance.config import Settings
from rfq_compliance.errors import ConfigurationError, UpstreamError
from rfq_compliance.llm.resolver import LookupStrategy, SDKNamespace, resolve
from rfq_compliance.models.requests import CompliancePrompt
from rfq_compliance.utils.logging import LoggerMixin


MODEL_ACCESSORS = ("get_generative_model", "get_model")


class ModelClient(LoggerMixin):
    """Shared, read-only handle on the model collaborator.

    Built once at startup and passed to the orchestrator. Holds no
    per-request state, so concurrent requests may share it.
    """

    def __init__(self, model: Any, model_name: str, timeout_seconds: float = 120.0):
        """Initialize the client.

        Args:
            model: SDK model object exposing ``generate_content``.
            model_name: Name of the model, for logging.
            timeout_seconds: Upper bound on a single model call.
        """
        if not callable(getattr(model, "generate_content", None)):
            raise ConfigurationError("Model object does not expose generate_content()")
        self._model = model
        self._model_name = model_name
        self._timeout_seconds = timeout_seconds

    @classmethod
    def from_sdk(
        cls,
        sdk: Any,
        api_key: str,
        model_name: str,
        timeout_seconds: float = 120.0,
        strategies: tuple[LookupStrategy, ...] | None = None,
    ) -> "ModelClient":
        """Resolve the SDK's constructor and build the model.

        SDKs with a module-level ``configure`` take the key there and the
        constructor takes the model name. Otherwise the constructor takes the
        key and returns a client that hands out models.
        """
        namespace = SDKNamespace(sdk)
        factory = resolve(namespace, strategies)

        configure = namespace.get("configure")
        if callable(configure):
            configure(api_key=api_key)
            instance = factory(model_name=model_name)
        else:
            instance = factory(api_key=api_key)

        model = cls._select_model(instance, model_name)
        client = cls(model, model_name=model_name, timeout_seconds=timeout_seconds)
        client.log_info("Model client initialized", model=model_name, timeout=timeout_seconds)
        return client

    @staticmethod
    def _select_model(instance: Any, model_name: str) -> Any:
        for accessor in MODEL_ACCESSORS:
            method = getattr(instance, accessor, None)
            if callable(method):
                return method(model_name=model_name)
        if callable(getattr(instance, "generate_content", None)):
            return instance
        raise ConfigurationError(
            "SDK client exposes neither get_generative_model() nor get_model()"
        )

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def timeout_seconds(self) -> float:
        return self._timeout_seconds

    @traceable(name="generate_content")
    async def generate(self, prompt: CompliancePrompt) -> Any:
        """Send the prompt to the model and return the raw SDK response.

        Raises:
            UpstreamError: If the call fails or exceeds the timeout.
        """
        kwargs: dict[str, Any] = {}
        if prompt.response_schema is not None:
            kwargs["generation_config"] = {
                "response_mime_type": "application/json",
                "response_schema": prompt.response_schema,
            }

        self.log_debug("Calling model", model=self._model_name, prompt_chars=len(prompt.text))
        # Executor future: on timeout the await is abandoned, not the thread
        call = partial(self._model.generate_content, prompt.text, **kwargs)
        try:
            return await asyncio.wait_for(
                asyncio.get_running_loop().run_in_executor(None, call),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise UpstreamError(
                f"Model call timed out after {self._timeout_seconds:g}s"
            ) from e
        except Exception as e:
            raise UpstreamError(f"Model call failed: {e}") from e


def build_model_client(settings: Settings) -> ModelClient:
    """Import the configured SDK and build the shared client.

    Raises:
        ConfigurationError: If the SDK cannot be imported or exposes no usable constructor.
    """
    try:
        sdk = importlib.import_module(settings.genai_sdk_module)
    except ImportError as e:
        raise ConfigurationError(
            f"Failed to import {settings.genai_sdk_module}: {e}"
        ) from e

    return ModelClient.from_sdk(
        sdk,
        api_key=settings.google_api_key.get_secret_value(),
        model_name=settings.gemini_model,
        timeout_seconds=settings.request_timeout_seconds,
    )
