"""Client configuration (pydantic BaseModel)."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .retry import RetryPolicy


class LogSection(BaseModel):
    """Logging settings."""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class ClientConfig(BaseModel):
    """Products client settings. Durations are in milliseconds."""

    base_url: str
    timeout_ms: int = Field(default=10000, gt=0)
    max_retries: int = Field(default=3, ge=0)
    retry_base_delay_ms: int = Field(default=1000, ge=0)
    retry_max_delay_ms: int = Field(default=30000, ge=0)
    dedup_window_ms: int = Field(default=5000, ge=0)
    headers: dict[str, str] = Field(default_factory=dict)
    client_version: str = "1.0.0"
    token_env_var: str = "VENDE_API_TOKEN"
    log: LogSection = Field(default_factory=LogSection)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_retries=self.max_retries,
            base_delay_ms=self.retry_base_delay_ms,
            max_delay_ms=self.retry_max_delay_ms,
        )
