"""Keyword extraction and relevance scoring.

- :func:`extract_keywords` -- ticket summary text to an ordered keyword tuple
- :func:`score_relevance` -- candidate name plus keywords to a verdict
- :class:`RelevanceScorer` -- config-bound facade that also applies the threshold
"""

from ticket_relevance.scoring.keywords import extract_keywords, tokenize
from ticket_relevance.scoring.relevance import (
    keyword_matches,
    match_percentage,
    normalize_candidate,
    score_relevance,
)
from ticket_relevance.scoring.scorer import RelevanceScorer

__all__ = [
    "RelevanceScorer",
    "extract_keywords",
    "keyword_matches",
    "match_percentage",
    "normalize_candidate",
    "score_relevance",
    "tokenize",
]
