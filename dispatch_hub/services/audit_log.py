"""
Audit Log - append-only record of queue mutations.

DESIGN PRINCIPLES:
- record() is the ONLY mutator
- No deletion, truncation, editing or reordering
- Entries are frozen models; entries() returns an immutable tuple
"""

from typing import Iterable, Iterator, List, Tuple
import logging

from dispatch_hub.models.audit import AuditAction, LogEntry
from dispatch_hub.models.incident import Incident

logger = logging.getLogger(__name__)


class AuditLog:
    """Chronological, append-only list of LogEntry."""

    def __init__(self):
        self._entries: List[LogEntry] = []

    def record(self, incident: Incident, action: AuditAction) -> LogEntry:
        """
        Append an entry stamped with the current time.

        Args:
            incident: Incident value being logged
            action: ADDED or DISPATCHED

        Returns:
            The recorded entry
        """
        entry = LogEntry(incident=incident, action=AuditAction(action))
        self._entries.append(entry)
        logger.info(f"Audit: {entry.action.value} incident {incident.id} ({incident.category}/{incident.district})")
        return entry

    def entries(self) -> Tuple[LogEntry, ...]:
        """All entries in insertion order."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.entries())

    @classmethod
    def from_entries(cls, entries: Iterable[LogEntry]) -> "AuditLog":
        """Rebuild a log from persisted entries, preserving their order."""
        log = cls()
        log._entries.extend(entries)
        return log
