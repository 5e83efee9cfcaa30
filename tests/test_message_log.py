import pytest
from pydantic import ValidationError

from linka_harness import MessageLog
from tests.conftest import category_event, statement_event


def test_append_preserves_arrival_order():
    log = MessageLog()
    events = [category_event("created", "c1"), statement_event("created"), category_event("deleted", "c1")]
    for env in events:
        log.append(env)
    assert log.snapshot() == tuple(events)
    assert len(log) == 3


def test_snapshot_is_a_copy():
    log = MessageLog()
    log.append(category_event("created"))
    snap = log.snapshot()
    log.append(category_event("updated"))
    assert len(snap) == 1
    assert len(log.snapshot()) == 2


def test_clear_empties_log_only():
    log = MessageLog()
    seen = []
    log.add_listener(seen.append)
    log.append(category_event("created"))
    log.clear()
    assert log.snapshot() == ()
    log.append(category_event("updated"))
    assert [e.action for e in seen] == ["created", "updated"]


def test_listener_sees_envelope_already_in_log():
    log = MessageLog()
    lengths = []
    log.add_listener(lambda env: lengths.append(len(log)))
    log.append(category_event("created"))
    assert lengths == [1]


def test_remove_listener_is_idempotent():
    log = MessageLog()
    seen = []
    remove = log.add_listener(seen.append)
    remove()
    remove()
    log.append(category_event("created"))
    assert seen == []


def test_failing_listener_does_not_break_append():
    log = MessageLog()
    seen = []

    def broken(_env):
        raise RuntimeError("boom")

    log.add_listener(broken)
    log.add_listener(seen.append)
    log.append(category_event("created"))
    assert len(log) == 1
    assert len(seen) == 1


def test_envelopes_are_immutable():
    env = category_event("created")
    with pytest.raises(ValidationError):
        env.type = "statement_update"
    with pytest.raises(ValidationError):
        env.payload.category.title = "changed"
