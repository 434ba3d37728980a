"""The immutable result of scoring one candidate name against one keyword set."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RelevanceVerdict:
    """Result of a relevance score.

    ``matched_keywords`` and ``missing_keywords`` are order-preserving
    subsequences of ``keywords`` that together cover it exactly once.

    Attributes:
        ticket_id: The ticket identifier stripped from the candidate name.
        candidate_name: The raw branch name or commit message that was scored.
        keywords: The full keyword set the candidate was scored against.
        match_percentage: Integer in [0, 100].  100 when ``keywords`` is empty.
        matched_keywords: Keywords found in the normalised candidate.
        missing_keywords: Keywords not found, in keyword order.
        explanation: Display-only sentence; no logic reads it.
    """

    ticket_id: str
    candidate_name: str
    keywords: tuple[str, ...]
    match_percentage: int
    matched_keywords: tuple[str, ...]
    missing_keywords: tuple[str, ...]
    explanation: str

    @property
    def keyword_count(self) -> int:
        return len(self.keywords)

    @property
    def matched_count(self) -> int:
        return len(self.matched_keywords)

    @property
    def is_vacuous(self) -> bool:
        """True when there were no keywords to check against."""
        return not self.keywords

    def to_dict(self) -> dict:
        """Serialise to a plain dictionary."""
        return {
            "ticket_id": self.ticket_id,
            "candidate_name": self.candidate_name,
            "keywords": list(self.keywords),
            "match_percentage": self.match_percentage,
            "matched_keywords": list(self.matched_keywords),
            "missing_keywords": list(self.missing_keywords),
            "explanation": self.explanation,
        }
