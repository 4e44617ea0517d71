"""Matching weights configuration model.

This module defines the MatchingWeights model holding the score-blend weights
and confidence thresholds of the title matching engine.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from animapper.shared.constants.matching import ConfidenceThresholds, ScoringWeights


class MatchingWeights(BaseModel):
    """Matching algorithm weights and thresholds configuration.

    Attributes:
        word_match_weight: Weight of the per-word variant score.
                           Default: 0.7
        string_similarity_weight: Weight of the whole-string similarity.
                                  Default: 0.3
        partial_match_factor: Credit of a substring word match relative to a
                              full match. Default: 0.5
        early_exit_threshold: Best score above which no further bundle titles
                              are searched. Default: 0.8
        acceptance_threshold: Best score a match must exceed to be returned.
                              Default: 0.4

    Example:
        >>> weights = MatchingWeights()
        >>> weights.word_match_weight
        0.7
        >>> weights.acceptance_threshold
        0.4
    """

    word_match_weight: float = Field(
        default=ScoringWeights.WORD_MATCH,
        ge=0.0,
        le=1.0,
        description="Weight of the per-word variant score",
    )
    string_similarity_weight: float = Field(
        default=ScoringWeights.STRING_SIMILARITY,
        ge=0.0,
        le=1.0,
        description="Weight of the whole-string similarity",
    )
    partial_match_factor: float = Field(
        default=ScoringWeights.PARTIAL_MATCH_FACTOR,
        ge=0.0,
        le=1.0,
        description="Credit of a substring word match relative to a full match",
    )
    early_exit_threshold: float = Field(
        default=ConfidenceThresholds.EARLY_EXIT,
        ge=0.0,
        le=1.0,
        description="Best score above which remaining titles are skipped",
    )
    acceptance_threshold: float = Field(
        default=ConfidenceThresholds.ACCEPTANCE,
        ge=0.0,
        le=1.0,
        description="Best score a match must exceed to be returned",
    )

    @model_validator(mode="after")
    def validate_blend_weights_sum(self) -> MatchingWeights:
        """Validate that the two blend weights sum to approximately 1.0."""
        blend_sum = self.word_match_weight + self.string_similarity_weight
        if not (0.99 <= blend_sum <= 1.01):  # Allow small floating point errors
            msg = (
                f"Score blend weights must sum to 1.0, got {blend_sum:.3f}. "
                f"word_match={self.word_match_weight:.3f}, "
                f"string_similarity={self.string_similarity_weight:.3f}"
            )
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def validate_threshold_order(self) -> MatchingWeights:
        """Validate that the acceptance threshold does not exceed the early exit one."""
        if self.acceptance_threshold > self.early_exit_threshold:
            msg = (
                f"acceptance_threshold ({self.acceptance_threshold:.3f}) must not exceed "
                f"early_exit_threshold ({self.early_exit_threshold:.3f})"
            )
            raise ValueError(msg)
        return self


__all__ = ["MatchingWeights"]
