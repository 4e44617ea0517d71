"""Provider clients and episode lookup orchestration."""

from .anilist_client import AnilistClient, build_title_bundle
from .anizip_client import AnizipClient
from .episode_mapper import (
    EpisodeMapper,
    LookupOutcome,
    LookupStatus,
    merge_episodes,
    parse_anilist_id,
)
from .hianime_client import HianimeClient, parse_episode_list, parse_search_results
from .http import ProviderHTTPClient
from .models import AnilistMedia, AnizipMapping, EpisodeRecord, EpisodesResponse

__all__ = [
    "AnilistClient",
    "AnilistMedia",
    "AnizipClient",
    "AnizipMapping",
    "EpisodeMapper",
    "EpisodeRecord",
    "EpisodesResponse",
    "HianimeClient",
    "LookupOutcome",
    "LookupStatus",
    "ProviderHTTPClient",
    "build_title_bundle",
    "merge_episodes",
    "parse_anilist_id",
    "parse_episode_list",
    "parse_search_results",
]
