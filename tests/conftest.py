import itertools

import pytest
from fastapi.testclient import TestClient

from winechain.api.app import app
from winechain.api.state import AppState, get_state
from winechain.core.ledger import InMemoryLedger
from winechain.core.router import Router

WINE_ARGS = ["alice", "M1", "2020-01-01", "PlaceA", "2020-06-01", "PlaceB"]


def _ticking_clock():
    ticks = itertools.count(1)
    return lambda: f"2024-01-01T00:00:{next(ticks):02d}+00:00"


@pytest.fixture
def store():
    return InMemoryLedger(clock=_ticking_clock())


@pytest.fixture
def router(store):
    return Router(store)


@pytest.fixture
def client(store):
    state = AppState(store=store)
    app.dependency_overrides[get_state] = lambda: state
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
