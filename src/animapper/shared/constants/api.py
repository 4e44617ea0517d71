"""
API Configuration Constants

Endpoints, request headers, the AniList GraphQL query and the Hianime page
selectors used by the provider clients.
"""

from typing import ClassVar

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


class RequestHeaders:
    """Headers sent with every provider request."""

    DEFAULT: ClassVar[dict[str, str]] = {
        "Accept": (
            "text/html,application/xhtml+xml,application/xml;q=0.9,"
            "image/avif,image/webp,*/*;q=0.8"
        ),
        "Accept-Language": "en-US,en;q=0.9",
        "Accept-Encoding": "gzip",
    }
    DEFAULT_TIMEOUT = 20.0  # seconds


class AnilistConfig:
    """AniList GraphQL API configuration."""

    BASE_URL = "https://graphql.anilist.co"

    # Unified CJK ideographs; titles containing them are never searched
    CJK_PATTERN = "[\u4e00-\u9fff]"

    MEDIA_QUERY = """
query ($id: Int) {
  Media(id: $id, type: ANIME) {
    id
    title {
      english
      romaji
      native
    }
    synonyms
    episodes
    format
    duration
    status
    description
    coverImage {
      large
      medium
    }
    bannerImage
    startDate {
      year
      month
      day
    }
    endDate {
      year
      month
      day
    }
  }
}
"""


class HianimeConfig:
    """Hianime site configuration."""

    BASE_URL = "https://aniwatchtv.to"
    SEARCH_PATH = "/search"
    EPISODE_LIST_PATH = "/ajax/v2/episode/list/{numeric_id}"
    WATCH_PATH = "/watch/{anime_id}"

    SEARCH_RESULT_SELECTOR = ".film_list-wrap > .flw-item .film-detail .film-name a"
    EPISODE_LINK_SELECTOR = "#detail-ss-list div.ss-list a"
    EPISODE_QUERY_KEY = "ep"

    AJAX_HEADERS: ClassVar[dict[str, str]] = {
        "X-Requested-With": "XMLHttpRequest",
    }


class AnizipConfig:
    """ani.zip mappings API configuration."""

    BASE_URL = "https://api.ani.zip/mappings"
    ANILIST_ID_PARAM = "anilist_id"
