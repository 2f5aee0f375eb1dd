"""Runtime settings.

Every endpoint and credential is supplied from the environment
(``ORDERFLOW_*`` variables or a ``.env`` file); nothing is embedded in
source.  Invalid values fail at load time with a pydantic
``ValidationError``.  The store endpoints may be left unset for commands
that never contact the stores; the ones that do call ``require()``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MissingSetting(Exception):
    """A setting needed by the requested operation is not configured."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"ORDERFLOW_{name.upper()} is not set")


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="ORDERFLOW_",
        env_file=".env",
        extra="ignore",
        str_strip_whitespace=True,
    )

    # Storage
    data_dir: Path = Field(default=Path("data"), description="Directory of the JSON-file stores")
    catalog_base_url: str = Field(
        default="http://localhost:5106",
        description="Base URL substituted into catalog picture references",
    )

    # Downstream HTTP endpoints
    order_store_url: str | None = Field(
        default=None, description="Order store endpoint (receives full orders)"
    )
    secondary_store_url: str | None = Field(
        default=None, description="Secondary store endpoint (receives summaries)"
    )
    http_timeout: float = Field(default=10.0, gt=0, description="Per-request timeout in seconds")

    # Queue
    queue_url: str = Field(default="nats://localhost:4222", description="NATS server URL")
    queue_token: SecretStr | None = Field(default=None, description="NATS auth token")
    queue_credentials_file: Path | None = Field(default=None, description="NATS .creds file")
    queue_name: str = Field(default="eshop-orders", min_length=1, description="Stream and subject name")
    queue_retry_attempts: int = Field(default=3, ge=1, description="Publish attempts in total")
    queue_retry_delay: float = Field(default=5.0, ge=0, description="Seconds between attempts")
    queue_timeout: float = Field(default=5.0, gt=0, description="Per-call timeout in seconds")
    queue_message_encoding: Literal["base64", "utf-8"] = "base64"

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = False

    @field_validator("order_store_url", "secondary_store_url", "catalog_base_url")
    @classmethod
    def validate_http_url(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid URL format: {v}")
        return v.rstrip("/")

    def require(self, name: str) -> str:
        """Return setting *name*, raising MissingSetting if it is unset."""
        value = getattr(self, name)
        if value is None:
            raise MissingSetting(name)
        return value

    @field_validator("queue_url")
    @classmethod
    def validate_queue_url(cls, v: str) -> str:
        if not v.startswith(("nats://", "tls://")):
            raise ValueError(f"Invalid URL format: {v}")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v
