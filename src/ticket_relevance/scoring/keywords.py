"""Keyword extraction from ticket summary text.

Turns free-form summary text into a short, ordered tuple of significant
words.  Extraction is local and deterministic: simple tokenisation and a
stoplist, no NLP dependencies.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from ticket_relevance.config import RelevanceConfig

logger = logging.getLogger(__name__)

# Underscore counts as a boundary even though \w includes it.
_TOKEN_SPLIT = re.compile(r"[\W_]+")

_DEFAULT_CONFIG = RelevanceConfig()


def tokenize(text: Optional[str]) -> list[str]:
    """Split *text* on non-alphanumeric boundaries and lower-case each token."""
    if not text:
        return []
    return [token for token in _TOKEN_SPLIT.split(text.lower()) if token]


def extract_keywords(
    text: Optional[str],
    config: Optional[RelevanceConfig] = None,
) -> tuple[str, ...]:
    """Extract the significant words of *text*.

    Tokens shorter than ``config.min_keyword_length`` and stoplist members
    are dropped, duplicates keep their first position, and the result is cut
    to the first ``config.max_keywords`` entries.

    Parameters
    ----------
    text:
        Ticket summary text.  ``None`` and ``""`` yield an empty tuple.
    config:
        Extraction settings.  Defaults to :class:`RelevanceConfig` defaults.

    Returns
    -------
    tuple[str, ...]
        Keywords in first-seen order.
    """
    config = config or _DEFAULT_CONFIG
    stop_words = config.stop_words

    keywords: list[str] = []
    seen: set[str] = set()
    for token in tokenize(text):
        if len(token) < config.min_keyword_length:
            continue
        if token in stop_words or token in seen:
            continue
        seen.add(token)
        keywords.append(token)
        if len(keywords) >= config.max_keywords:
            break

    logger.debug("Extracted %d keyword(s) from %r: %s", len(keywords), text, keywords)
    return tuple(keywords)
