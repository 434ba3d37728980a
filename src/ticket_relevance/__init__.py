"""Ticket Relevance - keyword relevance scoring of branch names and commit messages against tracker tickets."""

__version__ = "0.1.0"

from ticket_relevance.config import RelevanceConfig
from ticket_relevance.lookup import StaticTicketLookup, TicketLookup
from ticket_relevance.models import RelevanceAssessment, RelevanceTier, RelevanceVerdict
from ticket_relevance.presentation import ReportFormatter
from ticket_relevance.scoring import RelevanceScorer, extract_keywords, score_relevance

__all__ = [
    "RelevanceAssessment",
    "RelevanceConfig",
    "RelevanceScorer",
    "RelevanceTier",
    "RelevanceVerdict",
    "ReportFormatter",
    "StaticTicketLookup",
    "TicketLookup",
    "__version__",
    "extract_keywords",
    "score_relevance",
]
