"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import AliasChoices, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rfq_compliance.errors import ConfigurationError


class Settings(BaseSettings):
    """Application configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Google Generative AI Configuration
    google_api_key: SecretStr = Field(
        ...,
        validation_alias=AliasChoices("google_api_key", "gemini_api_key", "google_genai_api_key"),
        description="Google Generative AI API key",
    )
    gemini_model: str = Field(default="gemini-1.5-flash", description="Gemini model name")
    genai_sdk_module: str = Field(
        default="google.generativeai",
        description="Import path of the generative AI SDK",
    )
    request_timeout_seconds: float = Field(default=120.0, gt=0.0)

    # Application Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    json_logs: bool = Field(default=False)
    environment: Literal["development", "staging", "production", "test"] = Field(
        default="development"
    )

    # HTTP Settings
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, ge=1)
    upload_temp_dir: Path | None = Field(
        default=None,
        description="Directory for temporary upload files (system temp dir if unset)",
    )

    @field_validator("google_api_key")
    @classmethod
    def _strip_api_key(cls, value: SecretStr) -> SecretStr:
        stripped = value.get_secret_value().strip()
        if not stripped:
            raise ValueError("GOOGLE_API_KEY must not be blank")
        return SecretStr(stripped)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def log_as_json(self) -> bool:
        """JSON log lines when asked for, and always in production."""
        return self.json_logs or self.is_production


def load_settings(**overrides: Any) -> Settings:
    """Load settings, turning validation failures into a ConfigurationError."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise ConfigurationError(
            f"Invalid configuration ({', '.join(missing)}): set GOOGLE_API_KEY in the environment"
        ) from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()
