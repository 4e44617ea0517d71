"""Configuration domain models."""

from __future__ import annotations

from .api_settings import APISettings
from .app_settings import AppSettings, LoggingSettings, ServerSettings
from .matching_weights import MatchingWeights
from .settings import Settings

__all__ = [
    "APISettings",
    "AppSettings",
    "LoggingSettings",
    "MatchingWeights",
    "ServerSettings",
    "Settings",
]
