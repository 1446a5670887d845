"""Connector configuration.

Settings come from the process environment (prefix ``PRODUCTBOARD_``). They
are rebuilt on every call to ``get_settings`` so the API token is always read
at the time of use.
"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

DEFAULT_BASE_URL = "https://api.productboard.com"
DEFAULT_API_VERSION = "1"


class Settings(BaseSettings):
    """Environment-backed settings for the Productboard connector."""

    model_config = SettingsConfigDict(
        env_prefix="PRODUCTBOARD_",
        extra="ignore",
        case_sensitive=False,
    )

    api_token: Optional[str] = Field(
        default=None,
        description="Productboard API token (Bearer).",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=8,
        description="Base URL of the Productboard REST API.",
    )
    api_version: str = Field(
        default=DEFAULT_API_VERSION,
        min_length=1,
        description="Value sent in the X-Version header.",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level for the MCP server process.",
    )


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()


def get_api_token(settings: Optional[Settings] = None) -> str:
    """Return the configured API token or raise ConfigurationError."""
    settings = settings or get_settings()
    token = settings.api_token
    if not token or not token.strip():
        raise ConfigurationError(
            "Missing Productboard API token. Set PRODUCTBOARD_API_TOKEN in server environment."
        )
    return token.strip()
