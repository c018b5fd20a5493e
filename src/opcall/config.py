"""Environment configuration for opcall.

Settings are read from ``OPCALL_*`` environment variables and an
optional ``.env`` file in the working directory.  The core never reads
the environment itself; callers turn :class:`Settings` into the plain
values the core expects (see :meth:`Settings.auth_config`).
"""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the CLI and its collaborators."""

    model_config = SettingsConfigDict(
        env_prefix="OPCALL_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    uri: str | None = Field(default=None, description="Base URI of the remote service.")

    auth_type: str = Field(default="", description="Authentication type passed to the chain.")
    client_id: str | None = Field(default=None, description="OAuth client id.")
    client_secret: str | None = Field(default=None, description="OAuth client secret.")
    identity_uri: str | None = Field(
        default=None,
        description="Identity service URI; derived from the base URI when unset.",
    )
    pat: str | None = Field(default=None, description="Personal access token.")

    insecure: bool = Field(default=False, description="Disable TLS certificate verification.")
    debug: bool = Field(default=False, description="Trace requests and responses.")
    log_level: str = Field(default="WARNING", description="structlog / logging level.")

    identity_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for token requests (seconds).",
    )
    identity_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Connection retries for token requests.",
    )

    def auth_config(self) -> dict[str, Any]:
        """Return the authenticator configuration, omitting unset values."""
        values: dict[str, Any] = {
            "clientId": self.client_id,
            "clientSecret": self.client_secret,
            "uri": self.identity_uri,
            "pat": self.pat,
        }
        return {key: value for key, value in values.items() if value is not None}
