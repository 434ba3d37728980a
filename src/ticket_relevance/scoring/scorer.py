"""RelevanceScorer -- config-bound facade over extraction, scoring and assessment.

Construct one scorer at startup with a :class:`RelevanceConfig` and reuse it.
The scorer holds no state besides its immutable config, so it can be shared
freely, and two scorers with different configs never interfere.

Typical usage::

    scorer = RelevanceScorer(RelevanceConfig.load())

    verdict = scorer.score(
        "feature/SHOP-8548-gift-card-app",
        "SHOP-8548",
        "POC - create app to restrict gift cards",
    )
    verdict.match_percentage      # 60

    assessment = scorer.check(branch_name, ticket_id, lookup)
    assessment.relevant           # threshold applied
"""

from __future__ import annotations

import logging
from typing import Optional

from ticket_relevance.config import RelevanceConfig
from ticket_relevance.lookup import TicketLookup
from ticket_relevance.models.assessment import (
    RelevanceAssessment,
    assess_verdict,
    unavailable_assessment,
)
from ticket_relevance.models.verdict import RelevanceVerdict
from ticket_relevance.scoring.keywords import extract_keywords
from ticket_relevance.scoring.relevance import score_relevance

logger = logging.getLogger(__name__)


class RelevanceScorer:
    """Scores candidate names against ticket summaries.

    Parameters
    ----------
    config:
        Extraction, matching and threshold settings.  Defaults to
        :class:`RelevanceConfig` defaults.
    """

    def __init__(self, config: Optional[RelevanceConfig] = None) -> None:
        self.config = config or RelevanceConfig()

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def extract_keywords(self, summary: Optional[str]) -> tuple[str, ...]:
        """Extract keywords from *summary* with this scorer's config."""
        return extract_keywords(summary, self.config)

    def score(
        self,
        candidate_name: str,
        ticket_id: str,
        summary: Optional[str],
    ) -> RelevanceVerdict:
        """Extract keywords from *summary* once and score *candidate_name*."""
        keywords = self.extract_keywords(summary)
        return score_relevance(
            candidate_name,
            keywords,
            ticket_id,
            summary=summary,
            config=self.config,
        )

    # ------------------------------------------------------------------
    # Assessment
    # ------------------------------------------------------------------

    def assess(
        self,
        candidate_name: str,
        ticket_id: str,
        summary: Optional[str],
    ) -> RelevanceAssessment:
        """Score *candidate_name* and apply the relevance threshold.

        A *None* or empty summary means the ticket text is unknown; the
        result is then vacuously relevant with tier ``unknown``.
        """
        if not summary:
            verdict = score_relevance(candidate_name, (), ticket_id, config=self.config)
            logger.info(
                "No summary for %s; skipping content relevance for %r",
                ticket_id, candidate_name,
            )
            return unavailable_assessment(verdict, self.config)

        verdict = self.score(candidate_name, ticket_id, summary)
        assessment = assess_verdict(verdict, self.config, summary)
        logger.info(
            "%s %r: %d%% (%s, threshold %d%%)",
            ticket_id, candidate_name, verdict.match_percentage,
            assessment.tier.value, assessment.threshold,
        )
        return assessment

    def check(
        self,
        candidate_name: str,
        ticket_id: str,
        lookup: TicketLookup,
    ) -> RelevanceAssessment:
        """Fetch the summary of *ticket_id* from *lookup* and assess against it.

        Exceptions raised by *lookup* propagate unchanged; a *None* or empty
        summary is treated as "unavailable".
        """
        summary = lookup.get_ticket_summary(ticket_id)
        return self.assess(candidate_name, ticket_id, summary)
