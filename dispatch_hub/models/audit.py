"""
Audit trail models.

Each LogEntry carries a full copy of the Incident at logging time, so a later
dispatch of the same incident produces a second, independent entry.
"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timezone
from enum import Enum

from dispatch_hub.models.base import utc_now
from dispatch_hub.models.incident import Incident


class AuditAction(str, Enum):
    """Queue mutations that are recorded in the audit log."""
    ADDED = "ADDED"
    DISPATCHED = "DISPATCHED"


class LogEntry(BaseModel):
    """One audit log entry (immutable once recorded)."""

    model_config = ConfigDict(frozen=True)

    incident: Incident
    action: AuditAction
    timestamp: datetime = Field(default_factory=utc_now, description="When the event was logged")

    def describe(self) -> str:
        logged_at = self.timestamp.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        return f"[{self.action.value}] {self.incident.describe()} (at {logged_at})"
