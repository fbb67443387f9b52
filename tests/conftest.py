"""Shared fixtures for dispatch hub tests."""

import pytest

from dispatch_hub.services.dispatch_service import DispatchService
from dispatch_hub.services.state_store import DispatchState, StateStore

DEFAULT_DISTRICTS = ["central", "south", "east"]
YESTERDAY = ["fire", "medical", "security"]


@pytest.fixture
def state_path(tmp_path):
    return tmp_path / "dispatch_data.json"


@pytest.fixture
def store(state_path):
    return StateStore(state_path)


@pytest.fixture
def state():
    return DispatchState.initial(districts=DEFAULT_DISTRICTS, yesterday=YESTERDAY)


@pytest.fixture
def service(state, store):
    return DispatchService(state, store)
