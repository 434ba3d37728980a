"""ReportFormatter -- plain-text rendering of verdicts and assessments.

The formatter is pure: it takes result objects and returns strings.  It does
no I/O and makes no decisions; exit codes and colouring belong to whatever
surface prints the text.

Typical usage::

    formatter = ReportFormatter()
    print(formatter.format_assessment(assessment))
"""

from __future__ import annotations

from ticket_relevance.models.assessment import RelevanceAssessment, RelevanceTier
from ticket_relevance.models.verdict import RelevanceVerdict

_TIER_HEADLINES = {
    RelevanceTier.EXCELLENT: "Name is valid with excellent content relevance",
    RelevanceTier.GOOD: "Name is valid with good content relevance",
    RelevanceTier.BASIC: "Name is valid with basic content relevance",
    RelevanceTier.POOR: "Name does not match the ticket content",
    RelevanceTier.UNKNOWN: "Name is valid (content relevance not checked)",
}


class ReportFormatter:
    """Renders relevance results as human-readable text.

    Parameters
    ----------
    indent:
        Prefix applied to every detail line below the headline.
    """

    def __init__(self, indent: str = "  ") -> None:
        self.indent = indent

    def format_verdict(self, verdict: RelevanceVerdict) -> str:
        """Render the raw score without any threshold applied."""
        lines = [
            f"Ticket: {verdict.ticket_id or '(none)'}",
            f"Name: {verdict.candidate_name}",
            f"Content Relevance: {verdict.match_percentage}% "
            f"({verdict.matched_count}/{verdict.keyword_count} keywords)",
        ]
        lines.extend(self._keyword_lines(verdict.matched_keywords, verdict.missing_keywords))
        lines.append(verdict.explanation)
        return "\n".join(lines)

    def format_assessment(self, assessment: RelevanceAssessment) -> str:
        """Render an assessment: headline, message, then details."""
        verdict = assessment.verdict
        lines = [self.headline(assessment), assessment.message]

        if not assessment.summary_available:
            return "\n".join(lines)

        details = [
            f"Ticket: {verdict.ticket_id}",
            f"Summary: {assessment.ticket_summary}",
            f"Content Relevance: {verdict.match_percentage}% "
            f"(threshold {assessment.threshold}%)",
        ]
        if verdict.matched_keywords:
            details.append(f"Matched Keywords: {', '.join(verdict.matched_keywords)}")
        if assessment.suggested_keywords:
            details.append(f"Consider Adding: {', '.join(assessment.suggested_keywords)}")
        if not assessment.relevant:
            details.append(verdict.explanation)

        lines.extend(self.indent + line for line in details)
        return "\n".join(lines)

    @staticmethod
    def headline(assessment: RelevanceAssessment) -> str:
        return _TIER_HEADLINES[assessment.tier]

    @staticmethod
    def _keyword_lines(matched: tuple[str, ...], missing: tuple[str, ...]) -> list[str]:
        lines = []
        if matched:
            lines.append(f"Matched: {', '.join(matched)}")
        if missing:
            lines.append(f"Missing: {', '.join(missing)}")
        return lines
