"""Animapper Configuration Module

This module provides unified access to configuration models and settings
management:
- Settings: Main configuration facade
- Loader functions: get_config, load_settings, reload_config
- Domain models: App, Logging, Server, API and Matching settings
"""

from __future__ import annotations

from .loader import get_config, load_settings, reload_config
from .models import (
    APISettings,
    AppSettings,
    LoggingSettings,
    MatchingWeights,
    ServerSettings,
    Settings,
)

__all__ = [
    "APISettings",
    "AppSettings",
    "LoggingSettings",
    "MatchingWeights",
    "ServerSettings",
    "Settings",
    "get_config",
    "load_settings",
    "reload_config",
]
