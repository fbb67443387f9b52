"""
Pydantic base models shared across the dispatch hub.

DESIGN PRINCIPLE:
- Models should reflect data structure, not business logic
- Keep models simple and focused on validation
"""

from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


class OperationResult(BaseModel):
    """
    Outcome of an operation that can fail for reasons outside the core
    (durable storage). The message is always human-readable.
    """
    success: bool = True
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=utc_now)

    @classmethod
    def ok(cls, message: str) -> "OperationResult":
        return cls(success=True, message=message)

    @classmethod
    def failed(cls, message: str) -> "OperationResult":
        return cls(success=False, message=message)
