"""Tests for Hianime search and episode list scraping."""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock

import pytest

from animapper.config.models.api_settings import APISettings
from animapper.services.hianime_client import (
    HianimeClient,
    numeric_suffix,
    parse_episode_list,
    parse_search_results,
)
from animapper.services.http import ProviderHTTPClient
from animapper.shared.errors import AnimapperParsingError, ErrorCode


@pytest.fixture
def mock_http() -> Mock:
    """Mock provider HTTP client."""
    http = Mock(spec=ProviderHTTPClient)
    http.settings = APISettings(hianime_url="https://hianime.test/")
    http.request_text = AsyncMock()
    http.request_json = AsyncMock()
    return http


@pytest.fixture
def client(mock_http: Mock) -> HianimeClient:
    return HianimeClient(mock_http)


class TestParseSearchResults:
    """Tests for parse_search_results()."""

    def test_extracts_candidates_in_page_order(self, search_page_html: str) -> None:
        """Only result-list anchors with text and id become candidates."""
        candidates = parse_search_results(search_page_html)

        assert [(c.text, c.external_id) for c in candidates] == [
            ("The Apothecary Diaries", "the-apothecary-diaries-18578"),
            ("The Apothecary Diaries Season 2", "the-apothecary-diaries-season-2-19435"),
        ]

    def test_empty_page(self) -> None:
        assert parse_search_results("<html><body>No results</body></html>") == []


class TestParseEpisodeList:
    """Tests for parse_episode_list()."""

    def test_numbers_follow_link_positions(self, episode_list_html: str) -> None:
        """A link without href is skipped but keeps its number."""
        episodes = parse_episode_list(episode_list_html, "the-apothecary-diaries-18578")

        assert [(e.number, e.episode_id, e.title) for e in episodes] == [
            (1, "the-apothecary-diaries-18578?ep=107257", "Maomao"),
            (3, "the-apothecary-diaries-18578?ep=107259", "A Ghost in the Garden"),
        ]

    def test_link_without_episode_key_is_skipped(self) -> None:
        html = (
            '<div id="detail-ss-list"><div class="ss-list">'
            '<a href="/watch/x-1">1</a><a href="/watch/x-1?ep=5">2</a>'
            "</div></div>"
        )

        episodes = parse_episode_list(html, "x-1")

        assert [(e.number, e.episode_id) for e in episodes] == [(2, "x-1?ep=5")]

    def test_missing_title_attribute(self) -> None:
        html = '<div id="detail-ss-list"><div class="ss-list"><a href="/watch/x-1?ep=9">1</a></div></div>'

        assert parse_episode_list(html, "x-1")[0].title is None


class TestHianimeClient:
    """Tests for HianimeClient requests."""

    def test_numeric_suffix(self) -> None:
        assert numeric_suffix("the-apothecary-diaries-18578") == "18578"

    @pytest.mark.asyncio
    async def test_search_requests_search_page(
        self, client: HianimeClient, mock_http: Mock, search_page_html: str
    ) -> None:
        """The keyword is sent as a query parameter."""
        mock_http.request_text.return_value = search_page_html

        candidates = await client.search("The Apothecary Diaries")

        assert len(candidates) == 2
        call = mock_http.request_text.await_args
        assert call.args == ("GET", "https://hianime.test/search")
        assert call.kwargs["params"] == {"keyword": "The Apothecary Diaries"}
        assert call.kwargs["error_code"] == ErrorCode.HIANIME_REQUEST_FAILED

    @pytest.mark.asyncio
    async def test_fetch_episode_list(
        self, client: HianimeClient, mock_http: Mock, episode_list_html: str
    ) -> None:
        """The AJAX endpoint is called with the numeric id and a watch-page referer."""
        mock_http.request_json.return_value = {"status": True, "html": episode_list_html}

        episodes = await client.fetch_episode_list("the-apothecary-diaries-18578")

        assert [e.number for e in episodes] == [1, 3]
        call = mock_http.request_json.await_args
        assert call.args == ("GET", "https://hianime.test/ajax/v2/episode/list/18578")
        headers = call.kwargs["headers"]
        assert headers["Referer"] == "https://hianime.test/watch/the-apothecary-diaries-18578"
        assert headers["X-Requested-With"] == "XMLHttpRequest"

    @pytest.mark.asyncio
    async def test_missing_html_gives_empty_list(
        self, client: HianimeClient, mock_http: Mock
    ) -> None:
        mock_http.request_json.return_value = {"status": False}

        assert await client.fetch_episode_list("x-1") == []

    @pytest.mark.asyncio
    async def test_non_object_payload_raises(self, client: HianimeClient, mock_http: Mock) -> None:
        mock_http.request_json.return_value = ["unexpected"]

        with pytest.raises(AnimapperParsingError):
            await client.fetch_episode_list("x-1")
