"""Matching Engine Domain Models.

Immutable value objects exchanged between the matching engine and its
callers. They are frozen dataclasses, built per lookup and never shared.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


def dedupe_titles(titles: Iterable[str | None]) -> tuple[str, ...]:
    """Drop empty entries and exact duplicates, keeping first occurrences.

    Args:
        titles: Titles in priority order, possibly with ``None`` or blanks

    Returns:
        Tuple of unique non-empty titles in their original order

    Example:
        >>> dedupe_titles(["Frieren", None, "Sousou no Frieren", "Frieren"])
        ('Frieren', 'Sousou no Frieren')
    """
    unique: list[str] = []
    for title in titles:
        if title and title.strip() and title not in unique:
            unique.append(title)
    return tuple(unique)


@dataclass(frozen=True)
class TitleBundle:
    """All known names of one canonical work, in search priority order.

    The English title comes first, then the romanized title, then synonyms.
    Entries are unique (case-sensitive). Filtering of titles in other scripts
    happens where the bundle is built.

    Attributes:
        titles: Deduplicated, priority-ordered titles

    Example:
        >>> bundle = TitleBundle.from_titles("The Apothecary Diaries", "Kusuriya no Hitorigoto")
        >>> bundle.primary_title
        'The Apothecary Diaries'
    """

    titles: tuple[str, ...]

    def __post_init__(self) -> None:
        """Enforce uniqueness and drop blank entries."""
        object.__setattr__(self, "titles", dedupe_titles(self.titles))

    @classmethod
    def from_titles(cls, *titles: str | None) -> TitleBundle:
        """Build a bundle from titles in priority order, skipping ``None``."""
        return cls(titles=tuple(t for t in titles if t))

    @property
    def primary_title(self) -> str | None:
        """Highest priority title, or None for an empty bundle."""
        return self.titles[0] if self.titles else None

    def __len__(self) -> int:
        return len(self.titles)

    def __iter__(self) -> Iterator[str]:
        return iter(self.titles)


@dataclass(frozen=True)
class Candidate:
    """A search result scraped from the target site.

    Attributes:
        text: Display title of the result
        external_id: Opaque identifier used to resolve episodes

    Raises:
        ValueError: If text or external_id is empty
    """

    text: str
    external_id: str

    def __post_init__(self) -> None:
        """Validate candidate fields."""
        if not self.text or not self.text.strip():
            raise ValueError("Candidate text cannot be empty or whitespace")
        if not self.external_id or not self.external_id.strip():
            raise ValueError("Candidate external_id cannot be empty or whitespace")


@dataclass(frozen=True)
class MatchResult:
    """Best match found during one lookup.

    Attributes:
        score: Best composite score seen (0.0-1.0)
        external_id: Identifier of the best candidate, None when nothing was accepted
        query_title: Bundle title whose search produced the best candidate
        candidate_text: Display title of the best candidate
        titles_tried: Number of bundle titles searched before stopping

    Raises:
        ValueError: If score is outside [0, 1]
    """

    score: float = 0.0
    external_id: str | None = None
    query_title: str | None = None
    candidate_text: str | None = None
    titles_tried: int = 0

    def __post_init__(self) -> None:
        """Validate the score range."""
        if not 0.0 <= self.score <= 1.0:
            msg = f"Score {self.score} must be between 0.0 and 1.0"
            raise ValueError(msg)

    @property
    def is_match(self) -> bool:
        """True when a candidate was accepted."""
        return self.external_id is not None
