"""Tests for the FastAPI application."""

from __future__ import annotations

from collections.abc import Generator
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient
from pytest_mock import MockerFixture

from animapper.api.app import create_app
from animapper.config.models.settings import Settings
from animapper.services.episode_mapper import EpisodeMapper, LookupOutcome
from animapper.services.models import EpisodeRecord, EpisodesResponse
from animapper.shared.errors import ErrorCode, create_api_error


@pytest.fixture
def mock_mapper() -> Mock:
    mapper = Mock(spec=EpisodeMapper)
    mapper.get_episodes = AsyncMock()
    mapper.close = AsyncMock()
    return mapper


@pytest.fixture
def client(settings: Settings, mock_mapper: Mock) -> Generator[TestClient, None, None]:
    """Test client with the lifespan running."""
    with TestClient(create_app(settings=settings, mapper=mock_mapper)) as test_client:
        yield test_client


@pytest.fixture
def episodes_response() -> EpisodesResponse:
    return EpisodesResponse(
        anilist_id=161645,
        hianime_id="the-apothecary-diaries-18578",
        title="The Apothecary Diaries",
        total_episodes=1,
        episodes=[
            EpisodeRecord(
                episode_id="the-apothecary-diaries-18578?ep=107257",
                title="Maomao",
                number=1,
                air_date="2023-10-22",
            )
        ],
        titles={"en": "The Apothecary Diaries"},
        images=[],
        mappings={"anilist_id": 161645},
    )


class TestRoot:
    """Tests for GET /."""

    def test_describes_service(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {
            "about": "Simple API to map Anilist IDs to Hianime episode IDs",
            "status": 200,
            "routes": ["/episodes/:anilistId"],
        }


class TestGetEpisodes:
    """Tests for GET /episodes/{anilist_id}."""

    def test_matched_returns_camel_case_listing(
        self, client: TestClient, mock_mapper: Mock, episodes_response: EpisodesResponse
    ) -> None:
        # Given
        mock_mapper.get_episodes.return_value = LookupOutcome.matched(episodes_response)

        # When
        response = client.get("/episodes/161645")

        # Then
        assert response.status_code == 200
        body = response.json()
        assert body["anilistId"] == 161645
        assert body["hianimeId"] == "the-apothecary-diaries-18578"
        assert body["totalEpisodes"] == 1
        assert body["episodes"][0]["episodeId"] == "the-apothecary-diaries-18578?ep=107257"
        assert body["episodes"][0]["airDate"] == "2023-10-22"
        mock_mapper.get_episodes.assert_awaited_once_with(161645)

    @pytest.mark.parametrize("raw_id", ["abc", "12abc", "-1", "0"])
    def test_invalid_id_is_400(self, client: TestClient, mock_mapper: Mock, raw_id: str) -> None:
        response = client.get(f"/episodes/{raw_id}")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid Anilist ID"}
        mock_mapper.get_episodes.assert_not_awaited()

    def test_not_found_is_404(self, client: TestClient, mock_mapper: Mock) -> None:
        mock_mapper.get_episodes.return_value = LookupOutcome.not_found(
            ErrorCode.NO_MATCH_FOUND, "no match"
        )

        response = client.get("/episodes/999999999")

        assert response.status_code == 404
        assert response.json() == {"error": "Anime not found or no episodes available"}

    def test_provider_failure_is_500(self, client: TestClient, mock_mapper: Mock) -> None:
        """A failed lookup is an error, not a 404."""
        mock_mapper.get_episodes.return_value = LookupOutcome.failed(
            create_api_error("down", code=ErrorCode.ANILIST_REQUEST_FAILED)
        )

        response = client.get("/episodes/161645")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_unexpected_exception_is_500(self, client: TestClient, mock_mapper: Mock) -> None:
        mock_mapper.get_episodes.side_effect = RuntimeError("bug")

        response = client.get("/episodes/161645")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


class TestCors:
    """Tests for the CORS policy."""

    def test_any_origin_is_allowed(self, client: TestClient) -> None:
        response = client.get("/", headers={"Origin": "https://example.org"})

        assert response.headers["access-control-allow-origin"] == "*"

    def test_preflight_allows_request_headers(self, client: TestClient) -> None:
        response = client.options(
            "/episodes/1",
            headers={
                "Origin": "https://example.org",
                "Access-Control-Request-Method": "GET",
                "Access-Control-Request-Headers": "X-Requested-With, Content-Type",
            },
        )

        assert response.status_code == 200
        allowed = response.headers["access-control-allow-headers"].lower()
        assert "x-requested-with" in allowed
        assert "content-type" in allowed


class TestLifespan:
    """Tests for mapper ownership on shutdown."""

    def test_injected_mapper_is_not_closed(self, settings: Settings, mock_mapper: Mock) -> None:
        with TestClient(create_app(settings=settings, mapper=mock_mapper)):
            pass

        mock_mapper.close.assert_not_awaited()

    def test_owned_mapper_is_closed(self, settings: Settings, mocker: MockerFixture) -> None:
        owned = Mock(spec=EpisodeMapper)
        owned.close = AsyncMock()
        mocker.patch(
            "animapper.api.app.EpisodeMapper.from_settings",
            return_value=owned,
        )

        with TestClient(create_app(settings=settings)):
            pass

        owned.close.assert_awaited_once()
