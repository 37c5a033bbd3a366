from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from plugins.physics_calculator.core import ERROR_INDICATOR, LatestResultGate, SessionStore, compute


def test_only_latest_submission_is_applied():
    gate = LatestResultGate()
    first = gate.submit()
    second = gate.submit()
    assert (first, second) == (1, 2)

    assert gate.complete(second, compute("2+2")) is True
    assert gate.complete(first, compute("3")) is False
    assert gate.display() == "= 4 "
    assert gate.snapshot()["latex"] == "2+2"


def test_failure_shows_indicator_and_keeps_answer():
    gate = LatestResultGate()
    gate.complete(gate.submit(), compute("2+2"))
    gate.complete(gate.submit(), compute("\\operatorname{m}+\\operatorname{s}"))

    snapshot = gate.snapshot()
    assert gate.display() == ERROR_INDICATOR
    assert snapshot["answer"] == "= 4 "
    assert "Cannot add" in snapshot["error"]

    gate.complete(gate.submit(), compute("3"))
    assert gate.display() == "= 3 "
    assert gate.snapshot()["error"] is None


def test_client_sequence_numbers():
    gate = LatestResultGate()
    assert gate.submit(5) == 5
    assert gate.submit(3) == 3
    assert gate.snapshot()["latest"] == 5

    assert gate.complete(3, compute("1")) is False
    assert gate.complete(5, compute("2")) is True
    # A result is never applied twice.
    assert gate.complete(5, compute("7")) is False
    assert gate.display() == "= 2 "


def test_ticket_must_be_positive():
    with pytest.raises(ValueError):
        LatestResultGate().submit(0)


def test_out_of_order_completion_applies_newest_only():
    gate = LatestResultGate()
    tickets = [gate.submit() for _ in range(20)]
    results = {ticket: compute(f"{ticket}+0") for ticket in tickets}

    with ThreadPoolExecutor(max_workers=4) as pool:
        applied = list(pool.map(lambda ticket: gate.complete(ticket, results[ticket]), reversed(tickets)))

    assert applied.count(True) == 1
    assert applied[0] is True
    snapshot = gate.snapshot()
    assert snapshot["applied_sequence"] == 20
    assert snapshot["display"] == "= 2\\times 10^{1} "


def test_store_evicts_oldest_sessions():
    store = SessionStore(max_items=2)
    first, _ = store.create()
    second, _ = store.create()
    third, _ = store.create()

    assert len(store) == 2
    with pytest.raises(KeyError):
        store.get(first)
    assert isinstance(store.get(second), LatestResultGate)
    assert isinstance(store.get(third), LatestResultGate)


def test_store_get_refreshes_recency():
    store = SessionStore(max_items=2)
    first, _ = store.create()
    second, _ = store.create()
    store.get(first)
    store.create()

    store.get(first)
    with pytest.raises(KeyError):
        store.get(second)


def test_expired_sessions_are_purged():
    store = SessionStore(ttl=timedelta(seconds=-1))
    session_id, _ = store.create()
    assert len(store) == 0
    with pytest.raises(KeyError):
        store.get(session_id)


def test_delete_and_clear():
    store = SessionStore()
    first, _ = store.create()
    store.create()
    assert store.delete(first) is True
    assert store.delete(first) is False
    assert len(store) == 1
    store.clear()
    assert len(store) == 0
