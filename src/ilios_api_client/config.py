"""Configuration for the Ilios API client.

Uses Pydantic v2 for validation with sensible defaults.
"""

from __future__ import annotations

from typing import Annotated, Any, Self

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

DEFAULT_API_PATH = "/api/v3"
DEFAULT_BATCH_SIZE = 1000


class RetryConfig(BaseModel):
    """Transport retry configuration with exponential backoff."""

    model_config = ConfigDict(frozen=True)

    max_retries: Annotated[int, Field(ge=0, le=10)] = 2
    initial_delay: Annotated[float, Field(gt=0, le=60)] = 0.5
    max_delay: Annotated[float, Field(gt=0, le=300)] = 10.0
    exponential_base: Annotated[float, Field(ge=1.5, le=3.0)] = 2.0
    jitter: Annotated[float, Field(ge=0, le=1.0)] = 0.1

    def get_delay(self, attempt: int) -> float:
        """Calculate delay for given attempt with exponential backoff."""
        import random

        delay = min(
            self.initial_delay * (self.exponential_base**attempt),
            self.max_delay,
        )
        jitter_range = delay * self.jitter
        return delay + random.uniform(-jitter_range, jitter_range)  # noqa: S311


class TelemetryConfig(BaseModel):
    """Logging and tracing configuration."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    service_name: str = "ilios-api-client"
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unsupported log level: {v}"
            raise ValueError(msg)
        return level


class IliosClientConfig(BaseModel):
    """Main configuration for the Ilios API client."""

    model_config = ConfigDict(frozen=True, validate_default=True)

    # Required
    base_url: HttpUrl

    api_path: str = DEFAULT_API_PATH

    # Paging
    page_size: Annotated[int, Field(gt=0)] = DEFAULT_BATCH_SIZE
    batch_size: Annotated[int, Field(gt=0)] = DEFAULT_BATCH_SIZE

    # HTTP settings
    timeout: Annotated[float, Field(gt=0, le=300)] = 30.0
    connect_timeout: Annotated[float, Field(gt=0, le=60)] = 10.0

    # Sub-configurations
    retry: RetryConfig = Field(default_factory=RetryConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    @field_validator("api_path")
    @classmethod
    def normalize_api_path(cls, v: str) -> str:
        """Ensure the API path has a single leading slash and no trailing one."""
        return "/" + v.strip("/") if v.strip("/") else ""

    @property
    def base_url_str(self) -> str:
        """Get base URL as string without trailing slash."""
        return str(self.base_url).rstrip("/")

    @property
    def api_base_url(self) -> str:
        """Get the URL prefix shared by all API routes."""
        return f"{self.base_url_str}{self.api_path}"

    def with_overrides(self, **kwargs: Any) -> Self:
        """Create new config with overridden values."""
        data = self.model_dump(mode="json")
        data.update(kwargs)
        return self.__class__(**data)

    @classmethod
    def from_env(cls, prefix: str = "ILIOS_") -> Self:
        """Create config from environment variables."""
        import os

        def get_env(key: str, default: Any = None) -> Any:
            return os.environ.get(f"{prefix}{key}", default)

        base_url = get_env("BASE_URL")
        if not base_url:
            msg = f"{prefix}BASE_URL environment variable is required"
            raise ValueError(msg)

        return cls(
            base_url=base_url,
            api_path=get_env("API_PATH", DEFAULT_API_PATH),
            page_size=int(get_env("PAGE_SIZE", str(DEFAULT_BATCH_SIZE))),
            batch_size=int(get_env("BATCH_SIZE", str(DEFAULT_BATCH_SIZE))),
            timeout=float(get_env("TIMEOUT", "30.0")),
        )
