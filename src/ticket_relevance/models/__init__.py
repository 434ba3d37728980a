"""Result models for relevance scoring and assessment."""

from ticket_relevance.models.assessment import (
    RelevanceAssessment,
    RelevanceTier,
    assess_verdict,
    classify_tier,
    unavailable_assessment,
)
from ticket_relevance.models.verdict import RelevanceVerdict

__all__ = [
    "RelevanceAssessment",
    "RelevanceTier",
    "RelevanceVerdict",
    "assess_verdict",
    "classify_tier",
    "unavailable_assessment",
]
