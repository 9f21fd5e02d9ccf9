from __future__ import annotations

from urllib.parse import urlparse

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = "mfwsclient"


class ClientConfig(BaseSettings):
    """Connection settings for an M-Files Web Service endpoint.

    Values may be passed directly or read from the environment. The field
    name is always accepted alongside the environment aliases.

    Environment variables:
        - MFWS_BASE_URL (alias: MFWS_URL)
        - MFWS_TIMEOUT
        - MFWS_VERIFY (alias: MFWS_VERIFY_SSL)
        - MFWS_USER_AGENT
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        validation_alias=AliasChoices("base_url", "MFWS_BASE_URL", "MFWS_URL"),
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        validation_alias=AliasChoices("timeout", "MFWS_TIMEOUT"),
    )
    verify: bool = Field(
        default=True,
        validation_alias=AliasChoices("verify", "MFWS_VERIFY", "MFWS_VERIFY_SSL"),
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        validation_alias=AliasChoices("user_agent", "MFWS_USER_AGENT"),
    )

    @field_validator("base_url")
    @classmethod
    def _ensure_absolute_url(cls, v: str) -> str:
        """Require an absolute http(s) URL and drop any trailing slash."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"base_url must be an absolute http(s) URL: {v!r}")
        return v.rstrip("/")
