"""
Dispatch Service - orchestrates queues, trends, audit log and persistence.

DESIGN PRINCIPLES:
- Owns the DispatchState; nothing else holds a reference to it
- Sole writer of the audit log: every queue mutation is recorded
- Sole trigger of StateStore operations
- No queue-manipulation logic of its own

Not safe for concurrent use. A host serving several callers must wrap every
state-mutating call in a single lock.
"""

from typing import List, Optional, Tuple, Union
import logging

from dispatch_hub.core.errors import InvalidPriorityError, StateStoreError
from dispatch_hub.models.audit import AuditAction, LogEntry
from dispatch_hub.models.base import OperationResult
from dispatch_hub.models.incident import Incident, Priority
from dispatch_hub.services import trend_analyzer
from dispatch_hub.services.incident_workflow import IncidentStatus, IncidentWorkflow
from dispatch_hub.services.state_store import DispatchState, StateStore
from dispatch_hub.services.trend_analyzer import TrendReport
from dispatch_hub.utils.normalizer import normalize_key

logger = logging.getLogger(__name__)


class DispatchService:
    """Operations the operator console invokes."""

    def __init__(self, state: DispatchState, store: StateStore):
        self._state = state
        self._store = store

    @property
    def state(self) -> DispatchState:
        return self._state

    def submit(self, category: str, district: str, priority: Union[int, Priority]) -> Incident:
        """
        Record a new incident and queue it.

        Effects, in order: enqueue, add category to today's set, log ADDED.
        All three are in-memory and cannot fail once the incident is built.

        Args:
            category: Incident type (normalized here)
            district: District key (normalized here, created if new)
            priority: 0 (normal) or 1 (high)

        Raises:
            InvalidPriorityError: If priority is not 0 or 1
        """
        try:
            level = Priority(priority)
        except ValueError:
            raise InvalidPriorityError(priority)

        incident = Incident(
            category=normalize_key(category),
            district=normalize_key(district),
            priority=level,
        )
        IncidentWorkflow.validate_transition(IncidentStatus.RECORDED, IncidentStatus.QUEUED)

        self._state.queues.enqueue(incident.district, incident)
        self._state.today.add(incident.category)
        self._state.audit_log.record(incident, AuditAction.ADDED)

        position = "start" if incident.is_high_priority else "end"
        logger.info(
            f"{incident.priority.label} priority incident {incident.id} "
            f"added to the {position} of the '{incident.district}' queue"
        )
        return incident

    def dispatch_next(self, district: str) -> Optional[Incident]:
        """
        Dispatch the front incident of a district.

        Returns:
            The dispatched incident, or None when there is nothing to dispatch
            (the audit log is not touched in that case)
        """
        key = normalize_key(district)
        incident = self._state.queues.dequeue(key)
        if incident is None:
            logger.info(f"No incidents to dispatch in the '{key}' district")
            return None

        IncidentWorkflow.validate_transition(IncidentStatus.QUEUED, IncidentStatus.DISPATCHED)
        self._state.audit_log.record(incident, AuditAction.DISPATCHED)
        logger.info(f"Dispatched incident {incident.id} from '{key}'")
        return incident

    def snapshot(self) -> List[Tuple[str, List[Incident]]]:
        return self._state.queues.snapshot()

    def search(self, term: str) -> List[Incident]:
        return self._state.queues.search(term)

    def today_categories(self) -> List[str]:
        """Unique categories reported today, sorted for display."""
        return sorted(self._state.today)

    def trends(self) -> TrendReport:
        return trend_analyzer.analyze(self._state.today, self._state.yesterday)

    def log_entries(self) -> Tuple[LogEntry, ...]:
        return self._state.audit_log.entries()

    def incident_status(self, incident_id: str) -> Optional[IncidentStatus]:
        """Lifecycle status derived from the audit log; None if never logged."""
        return IncidentWorkflow.status_from_log(incident_id, self._state.audit_log)

    def persist(self) -> OperationResult:
        """Write the full state to the store. Failure is reported, not raised."""
        try:
            self._store.save(self._state)
        except StateStoreError as e:
            return OperationResult.failed(e.reason)
        return OperationResult.ok("System state saved successfully.")

    def restore(self) -> OperationResult:
        """
        Replace the in-memory state with the stored snapshot.

        All-or-nothing: on failure the current state is left untouched.
        """
        try:
            state = self._store.load()
        except StateStoreError as e:
            return OperationResult.failed(e.reason)
        self._state = state
        return OperationResult.ok("System state loaded successfully.")
