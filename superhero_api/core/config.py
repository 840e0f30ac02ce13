"""Settings read from the environment with pydantic-settings.

Values come from environment variables, then a ``.env`` file, then the
defaults below. Nested sections are addressed with a double underscore,
for example ``LOG_CONFIG__LOG_LEVEL=DEBUG`` or
``OBSERVABILITY_CONFIG__EXPORTER_TYPE=none``.

Production changes two defaults unless they were set explicitly: spans go
to OTLP instead of the log, and one trace in ten is sampled.
"""

import os
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import BaseModel, BeforeValidator, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

FormatterType = Literal["console", "json"]

# Set by managed container runtimes that ingest stdout as structured logs
STRUCTURED_LOG_PLATFORM_VARS = ("K_SERVICE", "AWS_EXECUTION_ENV")


def _blank_to_none(value: str | None) -> str | None:
    return None if value == "" else value


# An empty string, as left by `VAR=` in an env file, means unset
OptionalText = Annotated[str | None, BeforeValidator(_blank_to_none)]


class LogConfig(BaseModel):
    """Loguru output and request logging."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_formatter_type: FormatterType | None = Field(
        default=None, description="Chosen from the environment when unset"
    )
    excluded_paths: list[str] = Field(
        default_factory=lambda: ["/health"],
        description="Request paths that are served without request logging",
    )
    slow_request_threshold_ms: int = Field(default=1000, gt=0)


class ObservabilityConfig(BaseModel):
    """OpenTelemetry span export."""

    enable_tracing: bool = True
    exporter_type: Literal["console", "otlp", "none"] = Field(
        default="console",
        description="console writes finished spans to the debug log",
    )
    exporter_endpoint: OptionalText = Field(
        default=None, description="OTLP collector address"
    )
    trace_sample_rate: float = Field(default=1.0, ge=0.0, le=1.0)


class Settings(BaseSettings):
    """Settings of one running Superhero API process."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        validate_default=True,
    )

    app_name: str = "Superhero API"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True

    api_host: str = "127.0.0.1"
    api_port: int = 8000
    # An empty value turns the page off
    docs_url: OptionalText = "/docs"
    redoc_url: OptionalText = "/redoc"
    openapi_url: OptionalText = "/openapi.json"

    log_config: LogConfig = Field(default_factory=LogConfig)
    observability_config: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig
    )

    def model_post_init(self, __context: object) -> None:
        """Fill in the defaults that depend on the environment."""
        super().model_post_init(__context)

        if self.log_config.log_formatter_type is None:
            self.log_config.log_formatter_type = self.default_formatter()

        if self.environment != "production":
            return
        tracing = self.observability_config
        if tracing.exporter_type == "console":
            tracing.exporter_type = "otlp"
        if tracing.trace_sample_rate == 1.0:
            tracing.trace_sample_rate = 0.1

    def default_formatter(self) -> FormatterType:
        """Console output in local development, JSON lines everywhere else."""
        if any(os.getenv(name) for name in STRUCTURED_LOG_PLATFORM_VARS):
            return "json"
        return "console" if self.environment == "development" else "json"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once."""
    return Settings()
