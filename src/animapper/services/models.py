"""Provider API Response Models.

Pydantic models for the AniList, ani.zip and Hianime payloads and for the
assembled episode listing returned to API consumers.

All models ignore unknown fields so that new provider fields do not break
validation, and accept both snake_case names and the camelCase aliases the
providers (and our JSON output) use.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BaseTypeModel(BaseModel):
    """Lenient base model for provider boundaries."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class AnilistTitle(BaseTypeModel):
    """Title variants of an AniList media entry."""

    english: str | None = None
    romaji: str | None = None
    native: str | None = None


class AnilistCoverImage(BaseTypeModel):
    """Cover image URLs of an AniList media entry."""

    large: str | None = None
    medium: str | None = None


class AnilistFuzzyDate(BaseTypeModel):
    """AniList date where any part may be unknown."""

    year: int | None = None
    month: int | None = None
    day: int | None = None


class AnilistMedia(BaseTypeModel):
    """AniList ``Media`` object as requested by the metadata query.

    Example:
        >>> media = AnilistMedia.model_validate(
        ...     {"id": 161645, "title": {"english": "The Apothecary Diaries"}}
        ... )
        >>> media.title.english
        'The Apothecary Diaries'
    """

    id: int = Field(..., description="AniList media id")
    title: AnilistTitle = Field(default_factory=AnilistTitle)
    synonyms: list[str] = Field(default_factory=list)
    episodes: int | None = None
    format: str | None = None
    duration: int | None = None
    status: str | None = None
    description: str | None = None
    cover_image: AnilistCoverImage | None = None
    banner_image: str | None = None
    start_date: AnilistFuzzyDate | None = None
    end_date: AnilistFuzzyDate | None = None

    @property
    def display_title(self) -> str | None:
        """English title, falling back to the romanized one."""
        return self.title.english or self.title.romaji


class AnizipEpisode(BaseTypeModel):
    """Per-episode metadata from ani.zip.

    ``title`` maps language codes ("en", "ja", "x-jat") to titles.
    """

    title: dict[str, str | None] | None = None
    image: str | None = None
    overview: str | None = None
    air_date: str | None = None
    runtime: int | None = None

    @property
    def english_title(self) -> str | None:
        """English episode title, if known."""
        if not self.title:
            return None
        return self.title.get("en") or None


class AnizipMapping(BaseTypeModel):
    """ani.zip mappings response for one AniList id.

    Episodes are keyed by their episode number as a string ("1", "2", ...);
    specials use other keys ("S1") and are never looked up.
    """

    titles: dict[str, str | None] | None = None
    episodes: dict[str, AnizipEpisode] = Field(default_factory=dict)
    images: list[dict[str, Any]] | None = None
    mappings: dict[str, Any] | None = None

    def episode(self, number: int) -> AnizipEpisode | None:
        """Enrichment of the given sequential episode, if any."""
        return self.episodes.get(str(number))


class ScrapedEpisode(BaseTypeModel):
    """Episode link scraped from the Hianime episode list."""

    number: int = Field(..., ge=1, description="Sequential episode number")
    episode_id: str = Field(..., description="'<hianime id>?ep=<episode key>'")
    title: str | None = Field(default=None, description="Title attribute of the link")


class EpisodeRecord(BaseTypeModel):
    """Episode entry of the assembled listing."""

    episode_id: str
    title: str = ""
    number: int
    image: str | None = None
    overview: str | None = None
    air_date: str | None = None
    runtime: int | None = None


class EpisodesResponse(BaseTypeModel):
    """Assembled episode listing for one AniList id.

    Serialize with ``model_dump(by_alias=True)`` to get the camelCase JSON
    shape (``anilistId``, ``hianimeId``, ``totalEpisodes``, ...).
    """

    anilist_id: int
    hianime_id: str
    title: str
    total_episodes: int
    episodes: list[EpisodeRecord] = Field(default_factory=list)
    titles: dict[str, str | None] | None = None
    images: list[dict[str, Any]] | None = None
    mappings: dict[str, Any] | None = None


__all__ = [
    "AnilistCoverImage",
    "AnilistFuzzyDate",
    "AnilistMedia",
    "AnilistTitle",
    "AnizipEpisode",
    "AnizipMapping",
    "BaseTypeModel",
    "EpisodeRecord",
    "EpisodesResponse",
    "ScrapedEpisode",
]
