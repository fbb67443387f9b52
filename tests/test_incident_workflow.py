"""Incident lifecycle: RECORDED → QUEUED → DISPATCHED, no way back."""

import pytest

from dispatch_hub.models.audit import AuditAction, LogEntry
from dispatch_hub.models.incident import Incident
from dispatch_hub.services.incident_workflow import IncidentStatus, IncidentWorkflow


@pytest.mark.parametrize("from_status,to_status", [
    ("RECORDED", "QUEUED"),
    ("QUEUED", "DISPATCHED"),
])
def test_forward_transitions_allowed(from_status, to_status):
    assert IncidentWorkflow.is_valid_transition(from_status, to_status)
    assert IncidentWorkflow.validate_transition(from_status, to_status) == IncidentStatus(to_status)


@pytest.mark.parametrize("from_status,to_status", [
    ("RECORDED", "DISPATCHED"),   # skip
    ("DISPATCHED", "QUEUED"),     # requeue
    ("QUEUED", "RECORDED"),       # backward
    ("QUEUED", "CANCELLED"),      # unknown
])
def test_invalid_transitions_rejected(from_status, to_status):
    assert not IncidentWorkflow.is_valid_transition(from_status, to_status)
    with pytest.raises(ValueError):
        IncidentWorkflow.validate_transition(from_status, to_status)


def test_dispatched_is_terminal():
    assert IncidentWorkflow.get_allowed_transitions("DISPATCHED") == []
    assert IncidentWorkflow.get_allowed_transitions("bogus") == []


def test_status_from_log_uses_latest_entry():
    fire = Incident(category="fire", district="central")
    other = Incident(category="flood", district="south")
    entries = [
        LogEntry(incident=fire, action=AuditAction.ADDED),
        LogEntry(incident=other, action=AuditAction.ADDED),
        LogEntry(incident=fire, action=AuditAction.DISPATCHED),
    ]

    assert IncidentWorkflow.status_from_log(fire.id, entries) is IncidentStatus.DISPATCHED
    assert IncidentWorkflow.status_from_log(other.id, entries) is IncidentStatus.QUEUED
    assert IncidentWorkflow.status_from_log("missing", entries) is None
