"""Tests for word variation expansion and its cache."""

from __future__ import annotations

import pytest

from animapper.core.matching.variations import WordVariationCache, expand_word
from animapper.shared.constants import TitleReplacements


class TestExpandWord:
    """Tests for expand_word()."""

    def test_contains_the_word_itself(self) -> None:
        """A word with no replacements expands to itself only."""
        assert expand_word("frieren") == frozenset({"frieren"})

    def test_keeps_raw_and_normalized_forms(self) -> None:
        """Both the raw word and its normalized form are variants."""
        variants = expand_word("Part")
        assert {"Part", "part", "pt", "p"} <= variants

    def test_key_yields_its_values(self) -> None:
        """A table key expands to its short forms."""
        assert expand_word("season") == frozenset({"season", "s", "sz"})

    def test_value_yields_key_and_siblings(self) -> None:
        """A short form expands to its key and the key's other forms."""
        assert expand_word("ii") == frozenset({"ii", "2", "two", "second"})
        assert expand_word("pt") == frozenset({"pt", "part", "p"})

    @pytest.mark.parametrize(
        ("canonical", "short_form"),
        [(key, value) for key, values in TitleReplacements.TABLE.items() for value in values],
    )
    def test_table_relation_is_symmetric(self, canonical: str, short_form: str) -> None:
        """Each short form expands back to its canonical word."""
        assert short_form in expand_word(canonical)
        assert canonical in expand_word(short_form)

    def test_digits_are_stripped(self) -> None:
        """'s2' also matches as 's'."""
        assert expand_word("s2") == frozenset({"s2", "s"})

    def test_all_digit_word_adds_empty_variant(self) -> None:
        """Stripping every digit still counts as a change."""
        assert expand_word("2") == frozenset({"2", "", "two", "ii", "second"})
        assert "" in expand_word("100")

    def test_custom_replacement_table(self) -> None:
        """A caller-supplied table replaces the default one."""
        variants = expand_word("movie", {"movie": ("film",)})
        assert variants == frozenset({"movie", "film"})


class TestWordVariationCache:
    """Tests for WordVariationCache."""

    def test_first_lookup_is_a_miss_then_hit(self, variation_cache: WordVariationCache) -> None:
        """Repeated lookups are served from the cache."""
        # Given / When
        first = variation_cache.get("season")
        second = variation_cache.get("season")

        # Then
        assert first is second
        assert variation_cache.misses == 1
        assert variation_cache.hits == 1
        assert "season" in variation_cache
        assert len(variation_cache) == 1

    @pytest.mark.parametrize("word", ["season", "Season", "ii", "s2", "2", "frieren", "Part"])
    def test_cached_value_equals_cold_computation(
        self, variation_cache: WordVariationCache, word: str
    ) -> None:
        """A warm cache returns exactly what expand_word computes."""
        variation_cache.get(word)
        assert variation_cache.get(word) == expand_word(word)

    def test_case_variants_are_cached_separately(self, variation_cache: WordVariationCache) -> None:
        """Entries are keyed by the exact input word."""
        variation_cache.get("Part")
        assert "Part" in variation_cache
        assert "part" not in variation_cache

    def test_clear_empties_cache_and_counters(self, variation_cache: WordVariationCache) -> None:
        """clear() drops every entry."""
        variation_cache.get("two")
        variation_cache.get("two")

        variation_cache.clear()

        assert len(variation_cache) == 0
        assert variation_cache.hits == 0
        assert variation_cache.misses == 0

    def test_custom_table_is_used(self) -> None:
        """The cache expands with its own replacement table."""
        cache = WordVariationCache({"ova": ("oav",)})
        assert cache.get("oav") == frozenset({"oav", "ova"})
