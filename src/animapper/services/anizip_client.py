"""ani.zip episode enrichment client."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from animapper.config.models.api_settings import APISettings
from animapper.services.http import ProviderHTTPClient
from animapper.services.models import AnizipMapping
from animapper.shared.constants import AnizipConfig
from animapper.shared.errors import ErrorCode, create_parsing_error

logger = logging.getLogger(__name__)


class AnizipClient:
    """Fetches per-episode titles, images and cross-site mappings.

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

    async def fetch_mapping(self, anilist_id: int) -> AnizipMapping:
        """Fetch the ani.zip mapping of an AniList id.

        Raises:
            AnimapperNetworkError: If the request fails
            AnimapperParsingError: If the payload cannot be decoded
        """
        url = self.settings.anizip_url
        payload = await self.http.request_json(
            "GET",
            url,
            error_code=ErrorCode.ANIZIP_REQUEST_FAILED,
            operation="fetch_mapping",
            params={AnizipConfig.ANILIST_ID_PARAM: anilist_id},
        )

        try:
            mapping = AnizipMapping.model_validate(payload)
        except ValidationError as e:
            raise create_parsing_error(
                f"Invalid ani.zip payload for AniList id {anilist_id}",
                url=url,
                operation="fetch_mapping",
                original_error=e,
            ) from e

        logger.debug(
            "Fetched ani.zip mapping for %d (%d episode(s))",
            anilist_id,
            len(mapping.episodes),
        )
        return mapping
