"""Ticket summary lookup contract.

The scorer never talks to a ticket tracker.  It receives summaries through a
:class:`TicketLookup`, which returns the summary text for a ticket ID or
*None* when the ticket (or the tracker) is unavailable.  Network clients and
their caches implement this protocol elsewhere.

:class:`StaticTicketLookup` is an in-memory implementation for callers that
already hold the summaries, and for tests.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class TicketLookup(Protocol):
    """Anything that can resolve a ticket ID to its summary text."""

    def get_ticket_summary(self, ticket_id: str) -> Optional[str]:
        """Return the summary of *ticket_id*, or *None* if unavailable."""
        ...


class StaticTicketLookup:
    """Dict-backed :class:`TicketLookup` with case-insensitive ticket IDs.

    Parameters
    ----------
    summaries:
        Mapping of ticket ID to summary text.
    """

    def __init__(self, summaries: Optional[Mapping[str, str]] = None) -> None:
        self._summaries: dict[str, str] = {}
        for ticket_id, summary in (summaries or {}).items():
            self.add(ticket_id, summary)

    def add(self, ticket_id: str, summary: str) -> None:
        """Register (or replace) the summary for *ticket_id*."""
        self._summaries[self._key(ticket_id)] = summary

    def get_ticket_summary(self, ticket_id: str) -> Optional[str]:
        summary = self._summaries.get(self._key(ticket_id))
        if summary is None:
            logger.debug("No summary known for ticket %s", ticket_id)
        return summary

    def __contains__(self, ticket_id: object) -> bool:
        return isinstance(ticket_id, str) and self._key(ticket_id) in self._summaries

    def __len__(self) -> int:
        return len(self._summaries)

    @staticmethod
    def _key(ticket_id: str) -> str:
        return ticket_id.strip().upper()
