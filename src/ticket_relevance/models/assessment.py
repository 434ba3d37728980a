"""Threshold-based assessment of a relevance verdict.

A :class:`RelevanceVerdict` only reports a percentage.  Deciding whether that
percentage is good enough is a caller policy, captured here so that the
threshold can change without touching the scoring algorithm.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ticket_relevance.config import RelevanceConfig
from ticket_relevance.models.verdict import RelevanceVerdict


class RelevanceTier(str, Enum):
    """Coarse grading of a match percentage."""

    EXCELLENT = "excellent"
    GOOD = "good"
    BASIC = "basic"
    POOR = "poor"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RelevanceAssessment:
    """A verdict with the configured threshold applied.

    Attributes:
        verdict: The underlying score.
        threshold: Minimum percentage that was required.
        relevant: True when the percentage reached the threshold, or when no
            ticket summary was available to check against.
        tier: Grading of the percentage.
        message: One-line human-readable outcome.
        suggested_keywords: Missing keywords worth adding to the name.
        ticket_summary: The summary text scored against, if any.
    """

    verdict: RelevanceVerdict
    threshold: int
    relevant: bool
    tier: RelevanceTier
    message: str
    suggested_keywords: tuple[str, ...] = field(default_factory=tuple)
    ticket_summary: Optional[str] = None

    @property
    def summary_available(self) -> bool:
        return bool(self.ticket_summary)

    @property
    def match_percentage(self) -> int:
        return self.verdict.match_percentage

    def to_dict(self) -> dict:
        """Serialise to a plain dictionary."""
        return {
            "relevant": self.relevant,
            "tier": self.tier.value,
            "threshold": self.threshold,
            "message": self.message,
            "suggested_keywords": list(self.suggested_keywords),
            "ticket_summary": self.ticket_summary,
            "summary_available": self.summary_available,
            "verdict": self.verdict.to_dict(),
        }


def classify_tier(percentage: int, config: RelevanceConfig) -> RelevanceTier:
    """Grade *percentage* against the tier cut-offs in *config*.

    Anything below the relevance threshold is ``poor`` regardless of the
    tier cut-offs, so the tier never contradicts ``relevant``.
    """
    if percentage < config.relevance_threshold:
        return RelevanceTier.POOR
    if percentage >= config.excellent_threshold:
        return RelevanceTier.EXCELLENT
    if percentage >= config.good_threshold:
        return RelevanceTier.GOOD
    return RelevanceTier.BASIC


def assess_verdict(
    verdict: RelevanceVerdict,
    config: RelevanceConfig,
    summary: Optional[str] = None,
) -> RelevanceAssessment:
    """Apply the configured relevance threshold to *verdict*.

    Parameters
    ----------
    verdict:
        The score to assess.
    config:
        Supplies the threshold, tier cut-offs and suggestion count.
    summary:
        The ticket summary the verdict was scored against.  Used in the
        message when the name falls below the threshold; without it the
        message lists the missing keywords instead.
    """
    percentage = verdict.match_percentage
    relevant = percentage >= config.relevance_threshold
    tier = classify_tier(percentage, config)

    if relevant:
        message = (
            f"Content relevance: {percentage}% match "
            f"({verdict.matched_count}/{verdict.keyword_count} keywords)"
        )
    elif summary:
        message = (
            f"Low content relevance: {percentage}% match. "
            f'Name should relate to: "{summary}"'
        )
    else:
        message = (
            f"Low content relevance: {percentage}% match. "
            f"Name should relate to: {', '.join(verdict.missing_keywords)}"
        )

    return RelevanceAssessment(
        verdict=verdict,
        threshold=config.relevance_threshold,
        relevant=relevant,
        tier=tier,
        message=message,
        suggested_keywords=verdict.missing_keywords[: config.max_suggestions],
        ticket_summary=summary,
    )


def unavailable_assessment(
    verdict: RelevanceVerdict,
    config: RelevanceConfig,
) -> RelevanceAssessment:
    """Assessment used when no ticket summary could be obtained."""
    return RelevanceAssessment(
        verdict=verdict,
        threshold=config.relevance_threshold,
        relevant=True,
        tier=RelevanceTier.UNKNOWN,
        message="Cannot validate content relevance (no ticket summary available)",
    )
