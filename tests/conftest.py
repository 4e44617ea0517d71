"""
Pytest configuration and shared fixtures for Animapper tests.

This module provides common fixtures that can be used across all test
modules in the project. Provider payloads mirror the shapes returned by
AniList, Hianime and ani.zip; no test touches the network.
"""

from __future__ import annotations

from typing import Any

import pytest

from animapper.config.models.matching_weights import MatchingWeights
from animapper.config.models.settings import Settings
from animapper.core.matching.engine import MatchingEngine
from animapper.core.matching.scoring import TitleScorer
from animapper.core.matching.variations import WordVariationCache


@pytest.fixture
def variation_cache() -> WordVariationCache:
    """Fresh word variation cache, so no test sees another's entries."""
    return WordVariationCache()


@pytest.fixture
def scorer(variation_cache: WordVariationCache) -> TitleScorer:
    """Title scorer with default weights and a fresh cache."""
    return TitleScorer(weights=MatchingWeights(), variation_cache=variation_cache)


@pytest.fixture
def engine(scorer: TitleScorer) -> MatchingEngine:
    """Matching engine with default thresholds."""
    return MatchingEngine(scorer=scorer)


@pytest.fixture
def settings() -> Settings:
    """Settings built from defaults and the test environment."""
    return Settings()


@pytest.fixture
def anilist_media_payload() -> dict[str, Any]:
    """AniList ``Media`` object for The Apothecary Diaries."""
    return {
        "id": 161645,
        "title": {
            "english": "The Apothecary Diaries",
            "romaji": "Kusuriya no Hitorigoto",
            "native": "薬屋のひとりごと",
        },
        "synonyms": ["Kusuriya no Hitorigoto", "药屋少女的呢喃", "The Pharmacist's Monologue"],
        "episodes": 24,
        "format": "TV",
        "duration": 24,
        "status": "FINISHED",
        "description": "Maomao lived a peaceful life with her apothecary father.",
        "coverImage": {"large": "https://img.anili.st/large.jpg", "medium": None},
        "bannerImage": "https://img.anili.st/banner.jpg",
        "startDate": {"year": 2023, "month": 10, "day": 22},
        "endDate": {"year": 2024, "month": 3, "day": 24},
    }


@pytest.fixture
def anizip_payload() -> dict[str, Any]:
    """ani.zip mapping with two enriched episodes and one special."""
    return {
        "titles": {"en": "The Apothecary Diaries", "x-jat": "Kusuriya no Hitorigoto"},
        "episodes": {
            "1": {
                "title": {"en": "Maomao", "ja": "猫猫"},
                "image": "https://artworks.thetvdb.com/1.jpg",
                "overview": "Maomao is kidnapped and sold to the rear palace.",
                "airDate": "2023-10-22",
                "runtime": 24,
            },
            "2": {
                "title": {"en": "The Emperor's Distress", "ja": None},
                "image": None,
                "overview": None,
                "airDate": "2023-10-22",
                "runtime": 24,
            },
            "S1": {"title": {"en": "Recap"}},
        },
        "images": [{"coverType": "Banner", "url": "https://artworks.thetvdb.com/banner.jpg"}],
        "mappings": {"anilist_id": 161645, "mal_id": 54492, "type": "TV"},
    }


@pytest.fixture
def search_page_html() -> str:
    """Search results page with two anime and one malformed entry."""
    return """
    <html><body>
      <div class="film_list-wrap">
        <div class="flw-item">
          <div class="film-detail">
            <h3 class="film-name">
              <a href="/the-apothecary-diaries-18578?ref=search" title="The Apothecary Diaries">
                The Apothecary Diaries
              </a>
            </h3>
          </div>
        </div>
        <div class="flw-item">
          <div class="film-detail">
            <h3 class="film-name">
              <a href="/the-apothecary-diaries-season-2-19435?ref=search">The Apothecary Diaries Season 2</a>
            </h3>
          </div>
        </div>
        <div class="flw-item">
          <div class="film-detail">
            <h3 class="film-name"><a href="/no-title-1"></a></h3>
          </div>
        </div>
      </div>
      <div class="block_area-realtime">
        <div class="film-detail"><div class="film-name"><a href="/trending-1">Trending</a></div></div>
      </div>
    </body></html>
    """


@pytest.fixture
def episode_list_html() -> str:
    """Episode list fragment with three links, the second without href."""
    return """
    <div id="detail-ss-list">
      <div class="ss-list">
        <a href="/watch/the-apothecary-diaries-18578?ep=107257" title="Maomao" data-number="1">1</a>
        <a title="Missing link" data-number="2">2</a>
        <a href="/watch/the-apothecary-diaries-18578?ep=107259" title="A Ghost in the Garden">3</a>
      </div>
    </div>
    """
