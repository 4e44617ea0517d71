"""
Matching Engine Constants

Default score-blend weights, confidence thresholds and the word replacement
table used by the title matching engine. The runtime values come from
``animapper.config.models.matching_weights.MatchingWeights``; these are its
defaults.
"""

from typing import ClassVar


class ScoringWeights:
    """Weights of the composite title score.

    word_match + string_similarity must sum to 1.0.
    """

    WORD_MATCH = 0.7  # Per-word variant matching
    STRING_SIMILARITY = 0.3  # Whole-string similarity of normalized titles
    PARTIAL_MATCH_FACTOR = 0.5  # Contribution of a substring match relative to a full match


class ConfidenceThresholds:
    """Confidence thresholds for candidate selection.

    Both comparisons are strict: a best score equal to a threshold does not
    clear it.
    """

    EARLY_EXIT = 0.8  # Near-certain match, stop trying further titles
    ACCEPTANCE = 0.4  # Minimum best score surfaced as a match


class TitleReplacements:
    """Equivalent short forms of common words in anime titles.

    The table is stored one-directional; lookups check both keys and values.
    """

    TABLE: ClassVar[dict[str, tuple[str, ...]]] = {
        "season": ("s", "sz"),
        "s": ("season", "sz"),
        "sz": ("season", "s"),
        "two": ("2", "ii"),
        "three": ("3", "iii"),
        "four": ("4", "iv"),
        "part": ("pt", "p"),
        "episode": ("ep",),
        "chapters": ("ch",),
        "chapter": ("ch",),
        "first": ("1", "i"),
        "second": ("2", "ii"),
        "third": ("3", "iii"),
        "fourth": ("4", "iv"),
    }
