"""Title matching engine for resolving a canonical work on the search site.

The engine walks the titles of a ``TitleBundle`` in priority order, asks a
caller-supplied fetcher for the search results of each title, scores every
candidate and keeps the best one. A score above the early exit threshold ends
the walk immediately; otherwise the best candidate is returned only if it
clears the acceptance threshold once every title has been tried.

The title loop is strictly sequential because each early exit decision
depends on the best score accumulated so far. Fetcher failures propagate to
the caller unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Iterable, Sequence
from typing import Callable

from animapper.config.models.matching_weights import MatchingWeights
from animapper.core.matching.models import (
    Candidate,
    MatchResult,
    TitleBundle,
    dedupe_titles,
)
from animapper.core.matching.scoring import TitleScorer

logger = logging.getLogger(__name__)

CandidateFetcher = Callable[[str], Awaitable[Sequence[Candidate]]]


class MatchingEngine:
    """Selects the best search result for a canonical title bundle.

    Args:
        scorer: Title scorer (owns the word variation cache)
        weights: Thresholds; defaults to the scorer's weights

    Example:
        >>> engine = MatchingEngine()
        >>> async def fetch(title):
        ...     return [Candidate("Frieren: Beyond Journey's End", "frieren-18542")]
        >>> # await engine.select_best_match(bundle, fetch) -> "frieren-18542"
    """

    def __init__(
        self,
        scorer: TitleScorer | None = None,
        weights: MatchingWeights | None = None,
    ) -> None:
        self.weights = weights or (scorer.weights if scorer else MatchingWeights())
        self.scorer = scorer or TitleScorer(weights=self.weights)

    async def find_best_match(
        self,
        bundle: TitleBundle | Iterable[str],
        fetch_candidates: CandidateFetcher,
    ) -> MatchResult:
        """Search the bundle's titles in order and pick the best candidate.

        Args:
            bundle: Canonical titles in priority order
            fetch_candidates: Async callable returning the search results of a title

        Returns:
            MatchResult with the best score seen. ``external_id`` is set only
            when the candidate was accepted.
        """
        titles = dedupe_titles(bundle.titles if isinstance(bundle, TitleBundle) else bundle)

        best_score = 0.0
        best: tuple[str, Candidate] | None = None
        titles_tried = 0

        for search_title in titles:
            titles_tried += 1
            logger.debug("Trying title: '%s'", search_title)

            candidates = await fetch_candidates(search_title)

            for candidate in candidates:
                score = self.scorer.score(search_title, candidate.text)
                if score > best_score:
                    best_score = score
                    best = (search_title, candidate)
                    logger.debug(
                        "Found better match: '%s' (%s) score=%.3f",
                        candidate.text,
                        candidate.external_id,
                        score,
                    )

            if best is not None and best_score > self.weights.early_exit_threshold:
                logger.debug(
                    "Early exit after '%s' (%.3f > %.3f)",
                    search_title,
                    best_score,
                    self.weights.early_exit_threshold,
                )
                return self._result(best_score, best, titles_tried, accepted=True)

        accepted = best is not None and best_score > self.weights.acceptance_threshold
        if not accepted:
            logger.info(
                "No candidate above acceptance threshold (best %.3f <= %.3f) for %d title(s)",
                best_score,
                self.weights.acceptance_threshold,
                titles_tried,
            )
        return self._result(best_score, best, titles_tried, accepted=accepted)

    async def select_best_match(
        self,
        bundle: TitleBundle | Iterable[str],
        fetch_candidates: CandidateFetcher,
    ) -> str | None:
        """Return the external id of the accepted candidate, or None."""
        result = await self.find_best_match(bundle, fetch_candidates)
        return result.external_id

    @staticmethod
    def _result(
        score: float,
        best: tuple[str, Candidate] | None,
        titles_tried: int,
        *,
        accepted: bool,
    ) -> MatchResult:
        if best is None:
            return MatchResult(score=score, titles_tried=titles_tried)

        query_title, candidate = best
        return MatchResult(
            score=score,
            external_id=candidate.external_id if accepted else None,
            query_title=query_title,
            candidate_text=candidate.text,
            titles_tried=titles_tried,
        )
