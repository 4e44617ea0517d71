"""AniList metadata client.

Fetches the canonical metadata of an anime by AniList id through the GraphQL
API and derives the title bundle used for searching the episode site.
"""

from __future__ import annotations

import logging
import re

from pydantic import ValidationError

from animapper.config.models.api_settings import APISettings
from animapper.core.matching.models import TitleBundle
from animapper.services.http import ProviderHTTPClient
from animapper.services.models import AnilistMedia
from animapper.shared.constants import AnilistConfig
from animapper.shared.errors import ErrorCode, create_parsing_error

logger = logging.getLogger(__name__)

_CJK_PATTERN = re.compile(AnilistConfig.CJK_PATTERN)


def contains_cjk(text: str) -> bool:
    """Check whether a title contains CJK unified ideographs."""
    return _CJK_PATTERN.search(text) is not None


def build_title_bundle(media: AnilistMedia) -> TitleBundle:
    """Build the search title bundle of a media entry.

    Order is English, romanized, then synonyms. Empty titles and titles
    containing CJK ideographs are dropped; duplicates keep their first
    position.

    Args:
        media: AniList media entry

    Returns:
        TitleBundle in search priority order
    """
    raw_titles = [media.title.english, media.title.romaji, *media.synonyms]
    return TitleBundle.from_titles(
        *(title for title in raw_titles if title and not contains_cjk(title))
    )


class AnilistClient:
    """AniList GraphQL client.

    Args:
        http: Shared provider HTTP client
        settings: API settings (defaults to the HTTP client's settings)
    """

    def __init__(
        self,
        http: ProviderHTTPClient,
        settings: APISettings | None = None,
    ) -> None:
        self.http = http
        self.settings = settings or http.settings

    async def fetch_anime_info(self, anilist_id: int) -> AnilistMedia | None:
        """Fetch the metadata of an anime.

        Args:
            anilist_id: AniList media id

        Returns:
            AnilistMedia, or None when AniList does not know the id

        Raises:
            AnimapperNetworkError: If the request fails
            AnimapperParsingError: If the payload cannot be decoded
        """
        payload = await self.http.request_json(
            "POST",
            self.settings.anilist_url,
            error_code=ErrorCode.ANILIST_REQUEST_FAILED,
            operation="fetch_anime_info",
            json_body={
                "query": AnilistConfig.MEDIA_QUERY,
                "variables": {"id": anilist_id},
            },
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            allow_not_found=True,
        )
        if payload is None:
            logger.info("AniList returned 404 for id %d", anilist_id)
            return None

        media_data = (payload.get("data") or {}).get("Media") if isinstance(payload, dict) else None
        if media_data is None:
            logger.info("No AniList media for id %d", anilist_id)
            return None

        try:
            media = AnilistMedia.model_validate(media_data)
        except ValidationError as e:
            raise create_parsing_error(
                f"Invalid AniList media payload for id {anilist_id}",
                url=self.settings.anilist_url,
                operation="fetch_anime_info",
                original_error=e,
            ) from e

        logger.debug("Fetched AniList media %d: %s", media.id, media.display_title)
        return media
