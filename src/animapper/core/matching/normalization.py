"""Title normalization for fuzzy matching.

Both the search title and every candidate title pass through
``normalize_title`` before they are compared, so equal titles that differ
only in casing, punctuation or spacing compare equal.
"""

from __future__ import annotations

import re

# Anything that is neither a letter, a digit nor whitespace
_PUNCTUATION_PATTERN = re.compile(r"[^\w\s]|_")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_title(text: str) -> str:
    """Canonicalize free text for comparison.

    Lower-cases the text, deletes punctuation (without inserting a space),
    collapses whitespace runs to a single space and trims the result. The
    function is idempotent.

    Args:
        text: Raw title or word

    Returns:
        Normalized text, possibly empty

    Examples:
        >>> normalize_title("Re:Zero  - Starting Life in Another World!")
        'rezero starting life in another world'
        >>> normalize_title("Attack On Titan!!") == normalize_title("attack on titan")
        True
    """
    lowered = text.lower()
    stripped = _PUNCTUATION_PATTERN.sub("", lowered)
    return _WHITESPACE_PATTERN.sub(" ", stripped).strip()


def split_words(normalized: str) -> list[str]:
    """Split a normalized title into words.

    An empty title has no words.
    """
    return normalized.split(" ") if normalized else []
