"""
Dispatch Service Tests

Orchestration of queue, today's categories, audit log and persistence.
"""

import pytest
from hypothesis import given, strategies as st

from dispatch_hub.core.errors import InvalidPriorityError
from dispatch_hub.models.audit import AuditAction
from dispatch_hub.models.incident import Priority
from dispatch_hub.services.dispatch_service import DispatchService
from dispatch_hub.services.incident_workflow import IncidentStatus
from dispatch_hub.services.state_store import DispatchState, StateStore


# =============================================================================
# SUBMIT
# =============================================================================

class TestSubmit:

    def test_submit_normalizes_and_queues(self, service):
        incident = service.submit("  FIRE ", "Central", 1)

        assert incident.category == "fire"
        assert incident.district == "central"
        assert incident.priority is Priority.HIGH
        assert service.snapshot() == [("central", [incident])]

    def test_submit_tracks_today_categories(self, service):
        service.submit("fire", "central", 0)
        service.submit("Fire", "south", 1)
        service.submit("flood", "east", 0)

        assert service.today_categories() == ["fire", "flood"]

    def test_submit_logs_exactly_one_added_entry(self, service):
        before = len(service.log_entries())
        incident = service.submit("medical", "south", 0)

        entries = service.log_entries()
        assert len(entries) == before + 1
        assert entries[-1].action == AuditAction.ADDED
        assert entries[-1].incident == incident

    @pytest.mark.parametrize("priority", [2, -1, "1", None])
    def test_submit_rejects_bad_priority(self, service, priority):
        with pytest.raises(InvalidPriorityError):
            service.submit("fire", "central", priority)
        assert service.log_entries() == ()
        assert service.snapshot() == []

    def test_new_district_is_created(self, service):
        service.submit("storm", "Harbour", 0)
        assert "harbour" in service.state.queues.districts()

    def test_ids_are_unique(self, service):
        ids = {service.submit("fire", "central", 0).id for _ in range(20)}
        assert len(ids) == 20


# =============================================================================
# DISPATCH
# =============================================================================

class TestDispatchNext:

    def test_scenario_high_normal_high(self, service):
        service.submit("fire", "central", 1)
        service.submit("medical", "central", 0)
        service.submit("flood", "central", 1)

        _, queue = service.snapshot()[0]
        assert [i.category for i in queue] == ["flood", "fire", "medical"]
        assert service.dispatch_next("central").category == "flood"

    def test_dispatch_logs_one_dispatched_entry(self, service):
        incident = service.submit("fire", "central", 0)
        before = len(service.log_entries())

        assert service.dispatch_next("CENTRAL ") == incident
        entries = service.log_entries()
        assert len(entries) == before + 1
        assert entries[-1].action == AuditAction.DISPATCHED
        assert entries[-1].incident == incident

    @pytest.mark.parametrize("district", ["central", "atlantis"])
    def test_dispatch_from_empty_district_is_noop(self, service, district):
        assert service.dispatch_next(district) is None
        assert service.log_entries() == ()

    def test_incident_status_follows_lifecycle(self, service):
        incident = service.submit("fire", "central", 0)
        assert service.incident_status(incident.id) is IncidentStatus.QUEUED

        service.dispatch_next("central")
        assert service.incident_status(incident.id) is IncidentStatus.DISPATCHED
        assert service.incident_status("unknown") is None


@given(st.lists(st.sampled_from([0, 1]), min_size=1, max_size=30))
def test_dispatch_order_property(priorities):
    """
    Next dispatch is the newest undispatched HIGH incident, otherwise the
    oldest undispatched NORMAL incident.
    """
    service = DispatchService(DispatchState.initial(), StateStore("unused.json"))
    submitted = [service.submit(f"type{n}", "central", p) for n, p in enumerate(priorities)]

    highs = [i for i in submitted if i.priority is Priority.HIGH]
    normals = [i for i in submitted if i.priority is Priority.NORMAL]
    expected = list(reversed(highs)) + normals

    dispatched = []
    while True:
        incident = service.dispatch_next("central")
        if incident is None:
            break
        dispatched.append(incident)

    assert dispatched == expected
    assert len(service.log_entries()) == 2 * len(submitted)


# =============================================================================
# SEARCH / TRENDS
# =============================================================================

def test_search_scenario(service):
    central = service.submit("fire", "central", 0)
    service.submit("medical", "south", 0)

    assert service.search("fire") == [central]
    assert service.search("nothing") == []


def test_trends_use_current_sets(service):
    service.submit("fire", "central", 0)
    service.submit("flood", "south", 1)

    report = service.trends()
    assert report.union == {"fire", "medical", "security", "flood"}
    assert report.intersection == {"fire"}
    assert report.difference == {"flood"}


# =============================================================================
# PERSIST / RESTORE
# =============================================================================

class TestPersistence:

    def test_round_trip(self, service, store):
        service.submit("fire", "central", 1)
        service.submit("medical", "central", 0)
        service.submit("theft", "south", 0)
        service.dispatch_next("south")

        assert service.persist().success

        fresh = DispatchService(DispatchState.initial(), store)
        result = fresh.restore()

        assert result.success
        assert result.message == "System state loaded successfully."
        assert fresh.snapshot() == service.snapshot()
        assert fresh.today_categories() == service.today_categories()
        assert fresh.trends() == service.trends()
        assert fresh.log_entries() == service.log_entries()

    def test_restore_replaces_state_wholesale(self, service):
        service.submit("fire", "central", 0)
        service.persist()
        service.submit("flood", "east", 1)

        assert service.restore().success
        assert service.today_categories() == ["fire"]
        assert service.search("flood") == []
        assert len(service.log_entries()) == 1

    def test_failed_restore_leaves_state_untouched(self, service, state_path):
        incident = service.submit("fire", "central", 0)
        state_path.write_text("{broken", encoding="utf-8")

        result = service.restore()

        assert not result.success
        assert result.message.startswith("Error loading system state")
        assert service.snapshot() == [("central", [incident])]
        assert len(service.log_entries()) == 1

    def test_restore_without_snapshot_fails(self, service):
        result = service.restore()
        assert not result.success
        assert "no saved state" in result.message

    def test_failed_save_is_reported(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        service = DispatchService(DispatchState.initial(), StateStore(blocker / "state.json"))

        result = service.persist()
        assert not result.success
        assert result.message.startswith("Error saving system state")
