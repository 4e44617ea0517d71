"""Matching engine module for Animapper.

This module provides the title matching functionality that maps a canonical
AniList title bundle onto a Hianime search result using fuzzy, variant-aware
scoring.
"""

from .engine import CandidateFetcher, MatchingEngine
from .models import Candidate, MatchResult, TitleBundle
from .normalization import normalize_title
from .scoring import ScoreBreakdown, TitleScorer
from .variations import WordVariationCache, expand_word

__all__ = [
    "Candidate",
    "CandidateFetcher",
    "MatchResult",
    "MatchingEngine",
    "ScoreBreakdown",
    "TitleBundle",
    "TitleScorer",
    "WordVariationCache",
    "expand_word",
    "normalize_title",
]
