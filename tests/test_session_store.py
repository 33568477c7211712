"""
Tests for the in-process session store behind planner and sketch sessions.
"""

import pytest

from test_fixtures import client
from app.exceptions import NotFoundError
from services.planner_service import boards
from services.session_store import SessionStore
from services.sketch_service import pads


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_capacity_drops_least_recently_used():
    store = SessionStore("Test", max_items=2)
    first = store.add("a")
    second = store.add("b")

    # Touching the first session makes the second the oldest
    assert store.get(first) == "a"
    third = store.add("c")

    assert len(store) == 2
    assert store.get(first) == "a"
    assert store.get(third) == "c"
    with pytest.raises(NotFoundError):
        store.get(second)


def test_idle_sessions_expire():
    clock = FakeClock()
    store = SessionStore("Test", idle_ttl_sec=60, clock=clock)
    stale = store.add("old")
    clock.now += 30
    fresh = store.add("new")

    clock.now += 45
    with pytest.raises(NotFoundError):
        store.get(stale)
    assert store.get(fresh) == "new"
    assert len(store) == 1


def test_access_keeps_session_alive():
    clock = FakeClock()
    store = SessionStore("Test", idle_ttl_sec=60, clock=clock)
    session_id = store.add("x")
    for _ in range(5):
        clock.now += 50
        assert store.get(session_id) == "x"


def test_remove_and_clear():
    store = SessionStore("Test")
    session_id = store.add("x")
    store.remove(session_id)
    with pytest.raises(NotFoundError):
        store.remove(session_id)

    store.add("y")
    store.clear()
    assert len(store) == 0


def test_planner_sessions_are_capped(monkeypatch):
    monkeypatch.setattr(boards, "max_items", 3)
    ids = [client.post("/planner/sessions").json()["session_id"] for _ in range(5)]

    assert len(boards) == 3
    assert client.get(f"/planner/sessions/{ids[0]}").status_code == 404
    assert client.get(f"/planner/sessions/{ids[1]}").status_code == 404
    assert client.get(f"/planner/sessions/{ids[-1]}").status_code == 200


def test_sketch_sessions_expire(monkeypatch):
    clock = FakeClock()
    monkeypatch.setattr(pads, "_clock", clock)
    monkeypatch.setattr(pads, "idle_ttl_sec", 10)

    sid = client.post("/sketches").json()["session_id"]
    clock.now += 11

    r = client.get(f"/sketches/{sid}")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "not_found"
