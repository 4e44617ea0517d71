"""Hianime search and episode list client.

The site has no public API: search results are scraped from the search page
and episode lists come from the AJAX endpoint the watch page uses, which
returns an HTML fragment wrapped in JSON. Parsing is done with BeautifulSoup
in pure functions so it can be tested against saved markup.
"""

from __future__ import annotations

import logging
from urllib.parse import parse_qs, urlsplit

from bs4 import BeautifulSoup

from animapper.config.models.api_settings import APISettings
from animapper.core.matching.models import Candidate
from animapper.services.http import ProviderHTTPClient
from animapper.services.models import ScrapedEpisode
from animapper.shared.constants import HianimeConfig
from animapper.shared.errors import ErrorCode, create_parsing_error

logger = logging.getLogger(__name__)

HTML_PARSER = "html.parser"


def _last_path_segment(href: str) -> str:
    """Last path segment of a link, without query string or fragment."""
    return urlsplit(href).path.split("/")[-1]


def parse_search_results(html: str) -> list[Candidate]:
    """Extract candidates from a search results page.

    Args:
        html: Search page markup

    Returns:
        Candidates in page order; links without text or id are skipped
    """
    soup = BeautifulSoup(html, HTML_PARSER)
    candidates: list[Candidate] = []

    for link in soup.select(HianimeConfig.SEARCH_RESULT_SELECTOR):
        text = link.get_text(strip=True)
        href = link.get("href")
        external_id = _last_path_segment(href) if isinstance(href, str) else ""
        if not text or not external_id:
            continue
        candidates.append(Candidate(text=text, external_id=external_id))

    return candidates


def parse_episode_list(html: str, hianime_id: str) -> list[ScrapedEpisode]:
    """Extract episodes from the episode list fragment.

    Episode numbers are the 1-based positions of the links in the list. A
    link without a usable ``href`` is skipped but still takes its number, so
    the following episodes keep their positions.

    Args:
        html: Episode list HTML fragment
        hianime_id: Hianime anime id the list belongs to

    Returns:
        Scraped episodes in list order
    """
    soup = BeautifulSoup(html, HTML_PARSER)
    episodes: list[ScrapedEpisode] = []

    for number, link in enumerate(soup.select(HianimeConfig.EPISODE_LINK_SELECTOR), start=1):
        href = link.get("href")
        if not isinstance(href, str) or not href:
            continue

        episode_keys = parse_qs(urlsplit(href).query).get(HianimeConfig.EPISODE_QUERY_KEY)
        if not episode_keys:
            logger.debug("Episode link without episode key skipped: %s", href)
            continue

        title = link.get("title")
        episodes.append(
            ScrapedEpisode(
                number=number,
                episode_id=f"{hianime_id}?{HianimeConfig.EPISODE_QUERY_KEY}={episode_keys[0]}",
                title=title if isinstance(title, str) else None,
            )
        )

    return episodes


def numeric_suffix(hianime_id: str) -> str:
    """Numeric part of an id such as ``the-apothecary-diaries-18927``."""
    return hianime_id.split("-")[-1]


class HianimeClient:
    """Search and episode list access for Hianime.

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

    @property
    def base_url(self) -> str:
        return self.settings.hianime_url.rstrip("/")

    async def search(self, title: str) -> list[Candidate]:
        """Search the site for a title.

        Args:
            title: Title to search for

        Returns:
            Candidates from the first results page

        Raises:
            AnimapperNetworkError: If the search request fails
        """
        html = await self.http.request_text(
            "GET",
            f"{self.base_url}{HianimeConfig.SEARCH_PATH}",
            error_code=ErrorCode.HIANIME_REQUEST_FAILED,
            operation="hianime_search",
            params={"keyword": title},
        )
        candidates = parse_search_results(html or "")
        logger.debug("Search '%s' returned %d candidate(s)", title, len(candidates))
        return candidates

    async def fetch_episode_list(self, hianime_id: str) -> list[ScrapedEpisode]:
        """Fetch the episode list of an anime.

        Args:
            hianime_id: Hianime anime id (``<slug>-<number>``)

        Returns:
            Scraped episodes; empty when the response carries no list

        Raises:
            AnimapperNetworkError: If the request fails
            AnimapperParsingError: If the response is not the expected JSON
        """
        url = self.base_url + HianimeConfig.EPISODE_LIST_PATH.format(
            numeric_id=numeric_suffix(hianime_id),
        )
        headers = {
            **HianimeConfig.AJAX_HEADERS,
            "Referer": self.base_url + HianimeConfig.WATCH_PATH.format(anime_id=hianime_id),
        }
        payload = await self.http.request_json(
            "GET",
            url,
            error_code=ErrorCode.HIANIME_REQUEST_FAILED,
            operation="hianime_episode_list",
            headers=headers,
        )
        if not isinstance(payload, dict):
            raise create_parsing_error(
                f"Unexpected episode list payload for {hianime_id}",
                url=url,
                operation="hianime_episode_list",
            )

        html = payload.get("html")
        if not html:
            logger.info("Episode list for %s has no html", hianime_id)
            return []

        episodes = parse_episode_list(html, hianime_id)
        logger.debug("Episode list for %s has %d episode(s)", hianime_id, len(episodes))
        return episodes
