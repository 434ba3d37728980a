"""Relevance scoring of a branch name or commit message against ticket keywords.

The candidate name is normalised (lower-cased, ticket ID and category prefix
removed) and each keyword is looked up in it as a substring.  Keywords at
least ``partial_match_length`` characters long also match on their leading
``partial_match_length`` characters, so ``cards`` matches ``card`` and
``restrict`` matches ``restriction``.

The partial rule is a deliberate approximation.  It trades precision for
recall: short shared prefixes (``configure`` vs ``confirm``) also match.

Scoring never decides pass/fail.  It reports a percentage; see
:mod:`ticket_relevance.models.assessment` for the threshold policy.
"""

from __future__ import annotations

import logging
import math
import re
from functools import lru_cache
from typing import Iterable, Optional

from ticket_relevance.config import NAME_SEPARATORS, RelevanceConfig
from ticket_relevance.models.verdict import RelevanceVerdict

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = RelevanceConfig()

_SEPARATOR_CLASS = "[" + re.escape(NAME_SEPARATORS) + "]"


@lru_cache(maxsize=32)
def _prefix_pattern(prefixes: tuple[str, ...]) -> Optional[re.Pattern]:
    """Compile an anchored pattern for *prefixes*, longest alternative first."""
    if not prefixes:
        return None
    alternatives = "|".join(
        re.escape(p) for p in sorted(prefixes, key=len, reverse=True)
    )
    return re.compile(rf"^(?:{alternatives})(?:{_SEPARATOR_CLASS}+|$)")


def normalize_candidate(
    candidate_name: Optional[str],
    ticket_id: Optional[str],
    category_prefixes: Iterable[str] = (),
) -> str:
    """Reduce a branch name or commit message to its descriptive part.

    Lower-cases the name, removes every occurrence of *ticket_id* together
    with the separators that follow it, strips one leading category prefix
    and trims separators from both ends.  Inner separators are kept; they
    act as word boundaries for substring matching.

    >>> normalize_candidate("feature/SHOP-8548-gift-card-app", "SHOP-8548",
    ...                     ("feature", "bugfix"))
    'gift-card-app'
    """
    name = (candidate_name or "").lower()

    if ticket_id:
        # SHOP-1 must not eat the prefix of SHOP-12.
        ticket_pattern = re.escape(ticket_id.lower()) + rf"(?!\d){_SEPARATOR_CLASS}*"
        name = re.sub(ticket_pattern, "", name)
    name = name.strip(NAME_SEPARATORS)

    pattern = _prefix_pattern(tuple(category_prefixes))
    if pattern is not None:
        name = pattern.sub("", name, count=1)

    return name.strip(NAME_SEPARATORS)


def keyword_matches(keyword: str, normalized_name: str, partial_match_length: int = 4) -> bool:
    """Return True if *keyword* occurs in *normalized_name*, fully or partially."""
    if keyword in normalized_name:
        return True
    if partial_match_length and len(keyword) >= partial_match_length:
        return keyword[:partial_match_length] in normalized_name
    return False


def match_percentage(matched: int, total: int) -> int:
    """Round ``100 * matched / total`` half-up; 100 when there is nothing to match."""
    if total <= 0:
        return 100
    return int(math.floor(100 * matched / total + 0.5))


def build_explanation(keywords: tuple[str, ...], summary: Optional[str] = None) -> str:
    if summary:
        return f'Name should contain words related to: "{summary}"'
    if keywords:
        return f"Name should contain words related to: {', '.join(keywords)}"
    return "No ticket keywords to check against."


def score_relevance(
    candidate_name: Optional[str],
    keywords: Iterable[str],
    ticket_id: Optional[str],
    *,
    summary: Optional[str] = None,
    config: Optional[RelevanceConfig] = None,
) -> RelevanceVerdict:
    """Score how many *keywords* the candidate name contains.

    Parameters
    ----------
    candidate_name:
        The branch name or commit message being evaluated.  Any string is
        accepted, including ones that fail the naming convention.
    keywords:
        Keywords extracted from the ticket summary, in significance order.
    ticket_id:
        The ticket identifier to strip from the name (e.g. ``"SHOP-8548"``).
    summary:
        The ticket summary, embedded in the display-only explanation.
    config:
        Category prefixes and partial match length.  Defaults to
        :class:`RelevanceConfig` defaults.

    Returns
    -------
    RelevanceVerdict
        Percentage plus matched and missing keywords, both in keyword order.
    """
    config = config or _DEFAULT_CONFIG
    keywords = tuple(keywords)
    normalized = normalize_candidate(candidate_name, ticket_id, config.category_prefixes)

    matched: list[str] = []
    missing: list[str] = []
    for keyword in keywords:
        if keyword_matches(keyword, normalized, config.partial_match_length):
            matched.append(keyword)
        else:
            missing.append(keyword)

    percentage = match_percentage(len(matched), len(keywords))
    logger.debug(
        "Scored %r as %r against %d keyword(s): %d%% (matched=%s)",
        candidate_name, normalized, len(keywords), percentage, matched,
    )

    return RelevanceVerdict(
        ticket_id=ticket_id or "",
        candidate_name=candidate_name or "",
        keywords=keywords,
        match_percentage=percentage,
        matched_keywords=tuple(matched),
        missing_keywords=tuple(missing),
        explanation=build_explanation(keywords, summary),
    )
