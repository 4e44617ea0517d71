"""Tests for the ani.zip enrichment client."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, Mock

import pytest

from animapper.config.models.api_settings import APISettings
from animapper.services.anizip_client import AnizipClient
from animapper.services.http import ProviderHTTPClient
from animapper.shared.errors import AnimapperParsingError, ErrorCode


@pytest.fixture
def mock_http() -> Mock:
    http = Mock(spec=ProviderHTTPClient)
    http.settings = APISettings()
    http.request_json = AsyncMock()
    return http


class TestFetchMapping:
    """Tests for AnizipClient.fetch_mapping()."""

    @pytest.mark.asyncio
    async def test_parses_episodes(self, mock_http: Mock, anizip_payload: dict[str, Any]) -> None:
        """Episodes are keyed by number and camelCase fields are mapped."""
        mock_http.request_json.return_value = anizip_payload

        mapping = await AnizipClient(mock_http).fetch_mapping(161645)

        first = mapping.episode(1)
        assert first is not None
        assert first.english_title == "Maomao"
        assert first.air_date == "2023-10-22"
        assert first.runtime == 24
        assert mapping.episode(3) is None
        assert mapping.mappings == {"anilist_id": 161645, "mal_id": 54492, "type": "TV"}

        call = mock_http.request_json.await_args
        assert call.args == ("GET", "https://api.ani.zip/mappings")
        assert call.kwargs["params"] == {"anilist_id": 161645}
        assert call.kwargs["error_code"] == ErrorCode.ANIZIP_REQUEST_FAILED

    @pytest.mark.asyncio
    async def test_invalid_payload_raises_parsing_error(self, mock_http: Mock) -> None:
        mock_http.request_json.return_value = {"episodes": "not-a-dict"}

        with pytest.raises(AnimapperParsingError):
            await AnizipClient(mock_http).fetch_mapping(1)
