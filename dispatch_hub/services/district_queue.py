"""
District Queue Manager - one double-ended queue per district.

QUEUE DISCIPLINE:
- HIGH priority incidents are pushed to the FRONT (newest HIGH first)
- NORMAL priority incidents are pushed to the BACK (oldest NORMAL first)
- Dispatch always removes from the FRONT
- Districts are created on first use and never deleted

This class does not log to the audit trail; that is the caller's job.
"""

from collections import deque
from typing import Deque, Dict, Iterable, List, Mapping, Optional, Tuple
import logging

from dispatch_hub.models.incident import Incident
from dispatch_hub.utils.normalizer import normalize_key

logger = logging.getLogger(__name__)


class DistrictQueueManager:
    """Owns the per-district incident queues."""

    def __init__(self, districts: Iterable[str] = ()):
        # dict preserves insertion order, which makes district iteration stable
        self._queues: Dict[str, Deque[Incident]] = {}
        for district in districts:
            self.ensure_district(district)

    def ensure_district(self, district: str) -> Deque[Incident]:
        """Return the queue for a district, creating an empty one if needed."""
        queue = self._queues.get(district)
        if queue is None:
            queue = deque()
            self._queues[district] = queue
            logger.debug(f"Created queue for district '{district}'")
        return queue

    def enqueue(self, district: str, incident: Incident) -> None:
        """
        Insert an incident into a district queue.

        HIGH goes to the front, NORMAL to the back. Never fails.
        """
        queue = self.ensure_district(district)
        if incident.is_high_priority:
            queue.appendleft(incident)
        else:
            queue.append(incident)

    def dequeue(self, district: str) -> Optional[Incident]:
        """
        Remove and return the front incident of a district.

        Returns:
            The incident, or None when the district is unknown or empty
        """
        queue = self._queues.get(district)
        if not queue:
            return None
        return queue.popleft()

    def peek(self, district: str) -> Optional[Incident]:
        """Next incident to dispatch for a district, without removing it."""
        queue = self._queues.get(district)
        if not queue:
            return None
        return queue[0]

    def size(self, district: Optional[str] = None) -> int:
        """Queued incidents in one district, or across all districts."""
        if district is not None:
            return len(self._queues.get(district, ()))
        return sum(len(queue) for queue in self._queues.values())

    def districts(self) -> List[str]:
        """All known district keys, including empty ones."""
        return list(self._queues)

    def snapshot(self) -> List[Tuple[str, List[Incident]]]:
        """
        Read-only view of every non-empty district, front to back.

        The lists are copies; mutating them does not affect the queues.
        """
        return [
            (district, list(queue))
            for district, queue in self._queues.items()
            if queue
        ]

    def search(self, term: str) -> List[Incident]:
        """
        Find queued incidents whose category or district contains `term`.

        Matching is case-insensitive. Results follow district order, then
        front to back within each district. No match returns [].
        """
        needle = normalize_key(term)
        matches: List[Incident] = []
        for queue in self._queues.values():
            for incident in queue:
                if needle in incident.category or needle in incident.district:
                    matches.append(incident)
        return matches

    def export(self) -> Dict[str, List[Incident]]:
        """Ordered mapping of every district (empty ones included) to its contents."""
        return {district: list(queue) for district, queue in self._queues.items()}

    @classmethod
    def from_export(cls, data: Mapping[str, Iterable[Incident]]) -> "DistrictQueueManager":
        """Rebuild a manager from `export()` output, keeping queue order."""
        manager = cls()
        for district, incidents in data.items():
            manager._queues[district] = deque(incidents)
        return manager
