"""Composite title scoring for candidate matching.

This module scores a candidate title scraped from the search page against a
title from the canonical bundle. The composite score blends two signals:

1. A per-word score: every search word looks for its best counterpart among
   the candidate words, treating lexical variants ("season" / "s",
   "2" / "ii") as equal and giving partial credit to substring matches.
2. A whole-string similarity of the normalized titles (bigram Dice
   coefficient).

The blend weights and the partial-match factor come from
``MatchingWeights``.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from animapper.config.models.matching_weights import MatchingWeights
from animapper.core.matching.normalization import normalize_title, split_words
from animapper.core.matching.variations import WordVariationCache

logger = logging.getLogger(__name__)

FULL_MATCH = 1.0
NO_MATCH = 0.0


@dataclass(frozen=True)
class ScoreBreakdown:
    """Intermediate values of one score computation.

    Attributes:
        search_title: Normalized search title
        candidate_title: Normalized candidate title
        full_matches: Search words with a perfect variant match
        partial_matches: Sum of partial scores of the remaining matched words
        word_count: Number of words in the search title
        word_match_score: (full + factor * partial) / word_count
        string_similarity: Whole-string similarity (0.0-1.0)
        score: Final composite score (0.0-1.0)
    """

    search_title: str
    candidate_title: str
    full_matches: int
    partial_matches: float
    word_count: int
    word_match_score: float
    string_similarity: float
    score: float


def best_word_match(
    search_variants: frozenset[str],
    candidate_words_variants: Sequence[frozenset[str]],
) -> float:
    """Find the best match of one search word among the candidate words.

    An exact variant match returns 1.0 immediately, before any substring
    scoring of later pairs. Otherwise every pair where one variant contains
    the other scores len(shorter) / len(longer), and the maximum is kept.

    Args:
        search_variants: Variants of the search word
        candidate_words_variants: Variants of each candidate word, in order

    Returns:
        Best pairwise score (0.0-1.0)
    """
    best = NO_MATCH
    for candidate_variants in candidate_words_variants:
        for search_var in search_variants:
            for candidate_var in candidate_variants:
                if search_var == candidate_var:
                    return FULL_MATCH

                if search_var in candidate_var or candidate_var in search_var:
                    shorter = min(len(search_var), len(candidate_var))
                    longer = max(len(search_var), len(candidate_var))
                    best = max(best, shorter / longer)
    return best


def _bigrams(text: str) -> list[str]:
    return [text[i : i + 2] for i in range(len(text) - 1)]


def string_similarity(first: str, second: str) -> float:
    """Whole-string similarity of two titles (0.0-1.0).

    Dice coefficient over character bigrams, case-insensitive. Each bigram of
    ``second`` can consume one occurrence of the same bigram in ``first``.
    Strings shorter than two characters have no bigrams and score 0.0.

    Examples:
        >>> string_similarity("night", "nacht")
        0.25
        >>> string_similarity("shingeki no kyojin", "attack on titan")
        0.0
    """
    first = first.lower()
    second = second.lower()
    if len(first) < 2 or len(second) < 2:
        return 0.0

    remaining = Counter(_bigrams(first))
    matches = 0
    for bigram in _bigrams(second):
        if remaining[bigram] > 0:
            remaining[bigram] -= 1
            matches += 1

    return (2.0 * matches) / (len(first) + len(second) - 2)


class TitleScorer:
    """Scores candidate titles against search titles.

    The scorer owns the word variation cache, so callers that need a cold
    cache (tests, benchmarks) inject their own or call ``clear_cache``.

    Args:
        weights: Blend weights and partial-match factor
        variation_cache: Cache of word variants

    Example:
        >>> scorer = TitleScorer()
        >>> scorer.score("Re:Zero", "rezero")
        1.0
    """

    def __init__(
        self,
        weights: MatchingWeights | None = None,
        variation_cache: WordVariationCache | None = None,
    ) -> None:
        self.weights = weights or MatchingWeights()
        self.variation_cache = (
            variation_cache if variation_cache is not None else WordVariationCache()
        )

    def score(self, search_title: str, candidate_title: str) -> float:
        """Calculate the composite score of a candidate title.

        Scoring is not symmetric: the per-word score is averaged over the
        words of ``search_title`` only.

        Args:
            search_title: Title from the canonical bundle
            candidate_title: Display title of the candidate

        Returns:
            Score between 0.0 and 1.0
        """
        return self.explain(search_title, candidate_title).score

    def explain(self, search_title: str, candidate_title: str) -> ScoreBreakdown:
        """Calculate the composite score and return every intermediate value.

        Identical normalized titles score 1.0 without further work. If only
        one of the normalized titles is empty the score is 0.0.

        Args:
            search_title: Title from the canonical bundle
            candidate_title: Display title of the candidate

        Returns:
            ScoreBreakdown of the computation
        """
        normalized_search = normalize_title(search_title)
        normalized_candidate = normalize_title(candidate_title)

        search_words = split_words(normalized_search)
        candidate_words = split_words(normalized_candidate)

        if normalized_search == normalized_candidate:
            return ScoreBreakdown(
                search_title=normalized_search,
                candidate_title=normalized_candidate,
                full_matches=len(search_words),
                partial_matches=0.0,
                word_count=len(search_words),
                word_match_score=FULL_MATCH,
                string_similarity=FULL_MATCH,
                score=FULL_MATCH,
            )

        if not search_words or not candidate_words:
            return ScoreBreakdown(
                search_title=normalized_search,
                candidate_title=normalized_candidate,
                full_matches=0,
                partial_matches=0.0,
                word_count=len(search_words),
                word_match_score=NO_MATCH,
                string_similarity=NO_MATCH,
                score=NO_MATCH,
            )

        search_variants = [self.variation_cache.get(w) for w in search_words]
        candidate_variants = [self.variation_cache.get(w) for w in candidate_words]

        full_matches = 0
        partial_matches = 0.0
        for variants in search_variants:
            best = best_word_match(variants, candidate_variants)
            if best == FULL_MATCH:
                full_matches += 1
            elif best > NO_MATCH:
                partial_matches += best

        word_match_score = (
            full_matches + partial_matches * self.weights.partial_match_factor
        ) / len(search_words)
        similarity = string_similarity(normalized_search, normalized_candidate)

        composite = (
            word_match_score * self.weights.word_match_weight
            + similarity * self.weights.string_similarity_weight
        )
        composite = max(0.0, min(1.0, composite))

        logger.debug(
            "Title score: words=%.3f (full=%d, partial=%.3f), similarity=%.3f, "
            "final=%.3f ('%s' vs '%s')",
            word_match_score,
            full_matches,
            partial_matches,
            similarity,
            composite,
            normalized_search[:30],
            normalized_candidate[:30],
        )

        return ScoreBreakdown(
            search_title=normalized_search,
            candidate_title=normalized_candidate,
            full_matches=full_matches,
            partial_matches=partial_matches,
            word_count=len(search_words),
            word_match_score=word_match_score,
            string_similarity=similarity,
            score=composite,
        )

    def clear_cache(self) -> None:
        """Reset the word variation cache."""
        self.variation_cache.clear()
