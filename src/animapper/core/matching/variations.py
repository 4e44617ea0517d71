"""Word variation expansion for title matching.

A word in an anime title often has several equivalent surface forms:
"season" / "s", "two" / "2" / "ii", "part" / "pt". This module expands a
word into all such forms so that the scorer can treat them as equal.

Expansion results are memoized in a ``WordVariationCache``. The cache is a
pure performance aid: entries depend only on the input word, are never
changed once written, and can be cleared at any time.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Mapping

from animapper.core.matching.normalization import normalize_title
from animapper.shared.constants import TitleReplacements

logger = logging.getLogger(__name__)

_DIGITS_PATTERN = re.compile(r"\d+")


def expand_word(
    word: str,
    replacements: Mapping[str, tuple[str, ...]] = TitleReplacements.TABLE,
) -> frozenset[str]:
    """Compute the lexical variants of a word without caching.

    The result contains the word itself, its normalized form, the word with
    digits removed (whenever that changes it, even to the empty string), and
    every replacement-table form linked to the normalized word. The table is
    consulted in both directions: a key yields its values, and a value yields
    its key plus the key's other values.

    Args:
        word: Word to expand
        replacements: Replacement table mapping canonical words to short forms

    Returns:
        Frozen set of variants

    Examples:
        >>> sorted(expand_word("season"))
        ['s', 'season', 'sz']
        >>> sorted(expand_word("ii"))
        ['2', 'ii', 'second', 'two']
        >>> sorted(expand_word("2"))
        ['', '2', 'ii', 'second', 'two']
    """
    variations = {word}
    normalized = normalize_title(word)
    variations.add(normalized)

    # An all-digit word keeps "" as a variant, so two numbers match exactly
    without_digits = _DIGITS_PATTERN.sub("", word).strip()
    if without_digits != word:
        variations.add(without_digits)

    for key, values in replacements.items():
        if normalized == key:
            variations.update(values)
        elif normalized in values:
            variations.add(key)
            variations.update(values)

    return frozenset(variations)


class WordVariationCache:
    """Memoizing front end for ``expand_word``.

    Owned by a ``TitleScorer``; tests create a fresh instance per case.
    Entries are keyed by the exact input word, so a cache hit always equals a
    cold computation. Concurrent inserts of the same key are harmless because
    they store identical values.

    Example:
        >>> cache = WordVariationCache()
        >>> "2" in cache.get("two")
        True
        >>> len(cache)
        1
    """

    def __init__(
        self,
        replacements: Mapping[str, tuple[str, ...]] | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            replacements: Replacement table (defaults to TitleReplacements.TABLE)
        """
        self._replacements = (
            replacements if replacements is not None else TitleReplacements.TABLE
        )
        self._entries: dict[str, frozenset[str]] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, word: str) -> frozenset[str]:
        """Return the variants of ``word``, computing them on first use."""
        cached = self._entries.get(word)
        if cached is not None:
            self.hits += 1
            return cached

        self.misses += 1
        variations = expand_word(word, self._replacements)
        with self._lock:
            self._entries.setdefault(word, variations)
        return variations

    def clear(self) -> None:
        """Drop every cached entry and reset the counters."""
        with self._lock:
            self._entries.clear()
        self.hits = 0
        self.misses = 0
        logger.debug("Word variation cache cleared")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, word: object) -> bool:
        return word in self._entries
