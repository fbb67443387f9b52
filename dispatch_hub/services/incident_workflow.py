"""
Incident Workflow - strict lifecycle state machine.

DESIGN PRINCIPLES:
- RECORDED → QUEUED → DISPATCHED, in that order
- No skipping states
- No backward transitions (no cancellation, no requeue)
- DISPATCHED is terminal
"""

from enum import Enum
from typing import Dict, Iterable, List, Optional

from dispatch_hub.models.audit import AuditAction, LogEntry


class IncidentStatus(str, Enum):
    """Lifecycle of a single incident."""
    RECORDED = "RECORDED"       # Constructed, not yet in a queue
    QUEUED = "QUEUED"           # Waiting in a district queue
    DISPATCHED = "DISPATCHED"   # Removed from the queue, final


class IncidentWorkflow:
    """
    Lifecycle rules for incidents.

    Status is not stored on the (immutable) Incident; it is derived from the
    audit trail with status_from_log().
    """

    # Allowed transitions map: {from_status: [to_status, ...]}
    ALLOWED_TRANSITIONS: Dict[IncidentStatus, List[IncidentStatus]] = {
        IncidentStatus.RECORDED: [IncidentStatus.QUEUED],
        IncidentStatus.QUEUED: [IncidentStatus.DISPATCHED],
        IncidentStatus.DISPATCHED: []  # Terminal state
    }

    # Audit action that moves an incident into a status
    ACTION_STATUS: Dict[AuditAction, IncidentStatus] = {
        AuditAction.ADDED: IncidentStatus.QUEUED,
        AuditAction.DISPATCHED: IncidentStatus.DISPATCHED,
    }

    @classmethod
    def is_valid_transition(cls, from_status: str, to_status: str) -> bool:
        """
        Check if a status transition is valid.

        Args:
            from_status: Current status
            to_status: Desired new status

        Returns:
            True if transition is allowed, False otherwise
        """
        try:
            from_enum = IncidentStatus(from_status)
            to_enum = IncidentStatus(to_status)
        except ValueError:
            return False
        return to_enum in cls.ALLOWED_TRANSITIONS.get(from_enum, [])

    @classmethod
    def get_allowed_transitions(cls, current_status: str) -> List[str]:
        try:
            current_enum = IncidentStatus(current_status)
        except ValueError:
            return []
        return [status.value for status in cls.ALLOWED_TRANSITIONS.get(current_enum, [])]

    @classmethod
    def validate_transition(cls, current_status: str, new_status: str) -> IncidentStatus:
        """
        Validate a transition and return the new status.

        Raises:
            ValueError: If transition is invalid
        """
        if not cls.is_valid_transition(current_status, new_status):
            allowed = cls.get_allowed_transitions(current_status)
            raise ValueError(
                f"Invalid incident transition: {current_status} → {new_status}. "
                f"Allowed transitions from {current_status}: {allowed}"
            )
        return IncidentStatus(new_status)

    @classmethod
    def status_from_log(cls, incident_id: str, entries: Iterable[LogEntry]) -> Optional[IncidentStatus]:
        """
        Derive an incident's current status from audit entries.

        Returns:
            Latest status, or None if the incident never appears in the log
        """
        status: Optional[IncidentStatus] = None
        for entry in entries:
            if entry.incident.id == incident_id:
                status = cls.ACTION_STATUS[entry.action]
        return status
