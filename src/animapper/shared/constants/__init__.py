"""
Animapper Constants Module

Centralized constants for Animapper. Magic values used by the matching
engine, the provider clients, the HTTP API and the CLI live here.
"""

from .api import AnilistConfig, AnizipConfig, HianimeConfig, RequestHeaders
from .cli import CLIDefaults, CLIHelp, CLIMessages
from .http_codes import HTTPStatusCodes
from .matching import ConfidenceThresholds, ScoringWeights, TitleReplacements

__all__ = [
    "AnilistConfig",
    "AnizipConfig",
    "CLIDefaults",
    "CLIHelp",
    "CLIMessages",
    "ConfidenceThresholds",
    "HTTPStatusCodes",
    "HianimeConfig",
    "RequestHeaders",
    "ScoringWeights",
    "TitleReplacements",
]
