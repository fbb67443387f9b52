"""
Pydantic models for reported incidents.
An Incident is an immutable value; only its position in a queue and its
presence in the audit log change over time.
"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timedelta
from enum import IntEnum
from typing import Optional
import uuid

from dispatch_hub.models.base import utc_now


class Priority(IntEnum):
    """
    Dispatch priority, fixed at creation.

    HIGH incidents jump to the front of their district queue.
    """
    NORMAL = 0
    HIGH = 1

    @property
    def label(self) -> str:
        return "High" if self == Priority.HIGH else "Normal"


def new_incident_id() -> str:
    return uuid.uuid4().hex


class Incident(BaseModel):
    """One reported emergency."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_incident_id, description="Globally unique identifier")
    category: str = Field(..., description="Normalized incident type, e.g. 'fire'")
    district: str = Field(..., description="Normalized district key (queue partition)")
    priority: Priority = Field(default=Priority.NORMAL, description="NORMAL (0) or HIGH (1)")
    recorded_at: datetime = Field(default_factory=utc_now, description="When the incident was recorded")

    @property
    def is_high_priority(self) -> bool:
        return self.priority == Priority.HIGH

    def wait_time(self, now: Optional[datetime] = None) -> timedelta:
        """Elapsed time since the incident was recorded. Derived, never stored."""
        return (now or utc_now()) - self.recorded_at

    def describe(self) -> str:
        return (
            f"Incident Type: {self.category}, District: {self.district}, "
            f"Priority: {self.priority.label}"
        )
