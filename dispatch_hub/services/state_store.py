"""
State Store - durable snapshot/restore of the full dispatch state.

The snapshot is a single JSON document validated by pydantic on load, so a
file from an incompatible schema is rejected instead of half-applied.

FAILURE POLICY:
- save() raises StateStoreError; the target file is replaced via a temp file
  and os.replace, but a failed save still reports the failure to the caller
- load() raises StateStoreError and never returns a partial state
"""

from pydantic import BaseModel, Field, ValidationError
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Union
import logging
import os
import tempfile

from dispatch_hub.core.errors import StateStoreError
from dispatch_hub.models.audit import LogEntry
from dispatch_hub.models.base import utc_now
from dispatch_hub.models.incident import Incident
from dispatch_hub.services.audit_log import AuditLog
from dispatch_hub.services.district_queue import DistrictQueueManager

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class PersistedState(BaseModel):
    """On-disk shape of the dispatch state."""
    schema_version: int
    saved_at: datetime = Field(default_factory=utc_now)
    districts: Dict[str, List[Incident]] = Field(..., description="District -> queue, front to back")
    today: Set[str]
    yesterday: Set[str]
    log: List[LogEntry]


class DispatchState:
    """
    The full mutable state owned by a DispatchService.

    Passed into the service at construction and handed wholesale to the
    StateStore on save/restore.
    """

    def __init__(
        self,
        queues: Optional[DistrictQueueManager] = None,
        today: Optional[Iterable[str]] = None,
        yesterday: Optional[Iterable[str]] = None,
        audit_log: Optional[AuditLog] = None,
    ):
        self.queues = queues if queues is not None else DistrictQueueManager()
        self.today: Set[str] = set(today or ())
        self.yesterday: Set[str] = set(yesterday or ())
        self.audit_log = audit_log if audit_log is not None else AuditLog()

    @classmethod
    def initial(cls, districts: Iterable[str] = (), yesterday: Iterable[str] = ()) -> "DispatchState":
        """Fresh state with empty default districts and seeded comparison window."""
        return cls(queues=DistrictQueueManager(districts), yesterday=yesterday)

    def to_persisted(self) -> PersistedState:
        return PersistedState(
            schema_version=SCHEMA_VERSION,
            districts=self.queues.export(),
            today=set(self.today),
            yesterday=set(self.yesterday),
            log=list(self.audit_log.entries()),
        )

    @classmethod
    def from_persisted(cls, persisted: PersistedState) -> "DispatchState":
        return cls(
            queues=DistrictQueueManager.from_export(persisted.districts),
            today=persisted.today,
            yesterday=persisted.yesterday,
            audit_log=AuditLog.from_entries(persisted.log),
        )


class StateStore:
    """Reads and writes DispatchState snapshots at a fixed path."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, state: DispatchState) -> None:
        """
        Serialize the full state to disk.

        Raises:
            StateStoreError: If the snapshot could not be written
        """
        payload = state.to_persisted().model_dump_json(indent=2)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            logger.error(f"Failed to save state to {self.path}: {e}", exc_info=True)
            raise StateStoreError(f"Error saving system state: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)

        logger.info(f"Saved state to {self.path} ({len(payload)} bytes)")

    def load(self) -> DispatchState:
        """
        Read a snapshot back into a new DispatchState.

        Raises:
            StateStoreError: If the file is missing, unreadable, or not a
                compatible snapshot
        """
        if not self.path.exists():
            raise StateStoreError(f"Error loading system state: no saved state at {self.path}")

        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read state file {self.path}: {e}", exc_info=True)
            raise StateStoreError(f"Error loading system state: {e}") from e

        try:
            persisted = PersistedState.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"State file {self.path} is not a compatible snapshot: {e}")
            raise StateStoreError(
                f"Error loading system state: {self.path} is not a compatible snapshot "
                f"({e.error_count()} validation errors)"
            ) from e

        if persisted.schema_version != SCHEMA_VERSION:
            raise StateStoreError(
                f"Error loading system state: unsupported schema version "
                f"{persisted.schema_version} (expected {SCHEMA_VERSION})"
            )

        logger.info(f"Loaded state from {self.path} (saved at {persisted.saved_at.isoformat()})")
        return DispatchState.from_persisted(persisted)
