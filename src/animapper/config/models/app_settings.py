"""Application, logging and server configuration models."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings

from animapper.shared.constants import CLIDefaults


class AppSettings(BaseModel):
    """Application configuration."""

    name: str = Field(default="animapper", description="Application name")
    version: str = Field(default=CLIDefaults.VERSION, description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")


class LoggingSettings(BaseModel):
    """Logging configuration.

    This class manages logging level, optional JSON file output and whether
    console output is rendered by rich or as JSON lines.
    """

    level: str = Field(default=CLIDefaults.DEFAULT_LOG_LEVEL, description="Logging level")
    file: str | None = Field(default=None, description="Optional JSON log file path")
    rich_console: bool = Field(
        default=True,
        description="Render console logs with rich instead of JSON lines",
    )


class ServerSettings(BaseSettings):
    """HTTP server configuration.

    The bare ``PORT`` variable used by hosting platforms is honoured as well
    as ``ANIMAPPER_SERVER__PORT``.
    """

    model_config = {
        "env_prefix": "ANIMAPPER_SERVER__",
        "env_ignore_empty": True,
        "extra": "ignore",
        "populate_by_name": True,
    }

    host: str = Field(default="0.0.0.0", description="Interface to bind")  # noqa: S104
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("port", "ANIMAPPER_SERVER__PORT", "PORT"),
        description="Port to bind",
    )


__all__ = [
    "AppSettings",
    "LoggingSettings",
    "ServerSettings",
]
