# =============================================================================
# FILE: infrastructure/feeds/in_memory_audit_feed.py
# =============================================================================
"""
In-Memory Audit Feed for testing and development.

NOT FOR PRODUCTION USE - events are lost on restart.
"""

from __future__ import annotations

from typing import Iterable, List

from ...domain.audit import AuditEvent


class InMemoryAuditFeed:
    """
    In-memory implementation of AuditFeed.

    Useful for:
      - Unit testing
      - Local development without a BPO audit log
    """

    def __init__(self, events: Iterable[AuditEvent] = ()) -> None:
        self._events: List[AuditEvent] = list(events)

    def append(self, event: AuditEvent) -> None:
        """Append-only, same as BPO."""
        self._events.append(event)

    async def read_events(self) -> List[AuditEvent]:
        return list(self._events)
