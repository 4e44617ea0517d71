"""API configuration models.

Endpoints and request options for the three providers: AniList (metadata),
Hianime (search and episode lists) and ani.zip (episode enrichment).
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from animapper.shared.constants import AnilistConfig, AnizipConfig, HianimeConfig
from animapper.shared.constants.api import USER_AGENT, RequestHeaders


class APISettings(BaseModel):
    """Provider endpoint configuration."""

    anilist_url: str = Field(
        default=AnilistConfig.BASE_URL,
        description="AniList GraphQL endpoint",
    )
    hianime_url: str = Field(
        default=HianimeConfig.BASE_URL,
        description="Hianime site base URL",
    )
    anizip_url: str = Field(
        default=AnizipConfig.BASE_URL,
        description="ani.zip mappings endpoint",
    )
    timeout_seconds: float = Field(
        default=RequestHeaders.DEFAULT_TIMEOUT,
        gt=0,
        description="Total timeout of a single provider request",
    )
    user_agent: str = Field(
        default=USER_AGENT,
        description="User-Agent header sent to providers",
    )

    def request_headers(self) -> dict[str, str]:
        """Headers sent with every provider request."""
        return {**RequestHeaders.DEFAULT, "User-Agent": self.user_agent}


__all__ = ["APISettings"]
