"""AniList to Hianime episode mapping.

``EpisodeMapper`` resolves one AniList id into the Hianime episode listing:

1. Fetch the AniList metadata and build the search title bundle.
2. Let the matching engine pick the Hianime entry, searching title by title.
3. Fetch the Hianime episode list and the ani.zip enrichment concurrently.
4. Merge both into an ``EpisodesResponse``.

Every lookup ends in a ``LookupOutcome``. "Nothing found" and "something
failed" are different statuses and are never folded into each other.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import cast

from animapper.config.models.settings import Settings
from animapper.core.matching.engine import MatchingEngine
from animapper.core.matching.models import Candidate
from animapper.core.matching.scoring import TitleScorer
from animapper.services.anilist_client import AnilistClient, build_title_bundle
from animapper.services.anizip_client import AnizipClient
from animapper.services.hianime_client import HianimeClient
from animapper.services.http import ProviderHTTPClient
from animapper.services.models import (
    AnizipMapping,
    EpisodeRecord,
    EpisodesResponse,
    ScrapedEpisode,
)
from animapper.shared.errors import (
    AnimapperError,
    ErrorCode,
    create_invalid_id_error,
)
from animapper.shared.logging import (
    log_operation_error,
    log_operation_start,
    log_operation_success,
)

logger = logging.getLogger(__name__)


class LookupStatus(str, Enum):
    """Final status of an episode lookup."""

    MATCHED = "matched"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class LookupOutcome:
    """Result of an episode lookup.

    Attributes:
        status: Final status
        response: Episode listing (MATCHED only)
        error_code: Why nothing was returned (NOT_FOUND and FAILED)
        message: Human-readable explanation
        cause: Provider error behind a FAILED lookup
    """

    status: LookupStatus
    response: EpisodesResponse | None = None
    error_code: ErrorCode | None = None
    message: str | None = None
    cause: AnimapperError | None = None

    @classmethod
    def matched(cls, response: EpisodesResponse) -> LookupOutcome:
        return cls(status=LookupStatus.MATCHED, response=response)

    @classmethod
    def not_found(cls, error_code: ErrorCode, message: str) -> LookupOutcome:
        return cls(status=LookupStatus.NOT_FOUND, error_code=error_code, message=message)

    @classmethod
    def failed(cls, error: AnimapperError) -> LookupOutcome:
        return cls(
            status=LookupStatus.FAILED,
            error_code=error.code,
            message=error.message,
            cause=error,
        )

    @property
    def is_matched(self) -> bool:
        return self.status is LookupStatus.MATCHED


def parse_anilist_id(raw_id: str | int) -> int:
    """Parse an AniList id from user input.

    Only plain ASCII digit strings (or ints) with a positive value are
    accepted; signs, whitespace and trailing characters are rejected.

    Raises:
        DomainError: With code INVALID_ANIME_ID
    """
    if isinstance(raw_id, bool):
        raise create_invalid_id_error(str(raw_id), operation="parse_anilist_id")

    if isinstance(raw_id, int):
        value = raw_id
    elif isinstance(raw_id, str) and raw_id.isascii() and raw_id.isdigit():
        value = int(raw_id)
    else:
        raise create_invalid_id_error(str(raw_id), operation="parse_anilist_id")

    if value <= 0:
        raise create_invalid_id_error(str(raw_id), operation="parse_anilist_id")
    return value


def merge_episodes(
    scraped: Sequence[ScrapedEpisode],
    mapping: AnizipMapping | None,
) -> list[EpisodeRecord]:
    """Combine scraped episodes with their ani.zip enrichment.

    The enriched English title wins over the scraped link title; an episode
    with neither gets an empty title.
    """
    records: list[EpisodeRecord] = []
    for episode in scraped:
        enrichment = mapping.episode(episode.number) if mapping else None
        title = (enrichment.english_title if enrichment else None) or episode.title or ""
        records.append(
            EpisodeRecord(
                episode_id=episode.episode_id,
                title=title,
                number=episode.number,
                image=enrichment.image if enrichment else None,
                overview=enrichment.overview if enrichment else None,
                air_date=enrichment.air_date if enrichment else None,
                runtime=enrichment.runtime if enrichment else None,
            )
        )
    return records


class EpisodeMapper:
    """Orchestrates the providers and the matching engine for one lookup.

    Args:
        anilist: Metadata provider
        hianime: Search and episode list provider
        anizip: Enrichment provider
        engine: Matching engine (default thresholds when omitted)
        http: HTTP client closed by ``close()``, if the mapper owns it
    """

    def __init__(
        self,
        anilist: AnilistClient,
        hianime: HianimeClient,
        anizip: AnizipClient,
        engine: MatchingEngine | None = None,
        http: ProviderHTTPClient | None = None,
    ) -> None:
        self.anilist = anilist
        self.hianime = hianime
        self.anizip = anizip
        self.engine = engine or MatchingEngine()
        self._http = http

    @classmethod
    def from_settings(cls, settings: Settings) -> EpisodeMapper:
        """Build a mapper with its own HTTP client from settings."""
        http = ProviderHTTPClient(settings.api)
        engine = MatchingEngine(scorer=TitleScorer(weights=settings.matching))
        return cls(
            anilist=AnilistClient(http),
            hianime=HianimeClient(http),
            anizip=AnizipClient(http),
            engine=engine,
            http=http,
        )

    async def close(self) -> None:
        """Release the owned HTTP client."""
        if self._http is not None:
            await self._http.close()

    async def _search_candidates(self, title: str) -> Sequence[Candidate]:
        """Search fetcher for the engine; a failed search is an empty batch."""
        try:
            return await self.hianime.search(title)
        except AnimapperError as e:
            log_operation_error(logger, e, operation="hianime_search", context={"title": title})
            return []

    async def get_episodes(self, anilist_id: int) -> LookupOutcome:
        """Resolve the Hianime episode listing of an AniList id.

        Args:
            anilist_id: Parsed AniList id

        Returns:
            LookupOutcome; MATCHED carries the EpisodesResponse
        """
        start = time.perf_counter()
        log_operation_start(logger, "get_episodes", {"anilist_id": anilist_id})

        try:
            media = await self.anilist.fetch_anime_info(anilist_id)
        except AnimapperError as e:
            log_operation_error(logger, e, operation="get_episodes")
            return LookupOutcome.failed(e)

        if media is None:
            return LookupOutcome.not_found(
                ErrorCode.METADATA_NOT_FOUND,
                f"No AniList anime with id {anilist_id}",
            )

        title = media.display_title
        bundle = build_title_bundle(media)
        if not title or not len(bundle):
            return LookupOutcome.not_found(
                ErrorCode.METADATA_NOT_FOUND,
                f"AniList anime {anilist_id} has no searchable title",
            )

        match = await self.engine.find_best_match(bundle, self._search_candidates)
        if match.external_id is None:
            logger.info(
                "No Hianime match for AniList %d (best score %.3f)",
                anilist_id,
                match.score,
            )
            return LookupOutcome.not_found(
                ErrorCode.NO_MATCH_FOUND,
                f"No Hianime entry matches '{title}'",
            )
        hianime_id = match.external_id

        episodes_result, mapping_result = await asyncio.gather(
            self.hianime.fetch_episode_list(hianime_id),
            self.anizip.fetch_mapping(anilist_id),
            return_exceptions=True,
        )
        for result in (episodes_result, mapping_result):
            if isinstance(result, AnimapperError):
                log_operation_error(logger, result, operation="get_episodes")
                return LookupOutcome.failed(result)
            if isinstance(result, BaseException):
                raise result

        scraped = cast(list[ScrapedEpisode], episodes_result)
        mapping = cast(AnizipMapping, mapping_result)

        records = merge_episodes(scraped, mapping)
        if not records:
            return LookupOutcome.not_found(
                ErrorCode.EPISODES_NOT_FOUND,
                f"Hianime entry {hianime_id} lists no episodes",
            )

        response = EpisodesResponse(
            anilist_id=anilist_id,
            hianime_id=hianime_id,
            title=title,
            total_episodes=len(records),
            episodes=records,
            titles=mapping.titles,
            images=mapping.images,
            mappings=mapping.mappings,
        )

        log_operation_success(
            logger,
            "get_episodes",
            (time.perf_counter() - start) * 1000,
            result_info={"hianime_id": hianime_id, "episodes": len(records)},
        )
        return LookupOutcome.matched(response)
