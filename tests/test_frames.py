import json

import pytest

from linka_harness import MalformedFrame
from linka_harness.models.envelope import (
    Ack,
    CategoryDeleted,
    CategoryUpdate,
    StatementCreated,
    StatementUpdate,
)
from linka_harness.transport.frames import decode_frame, encode_frame


def test_decodes_category_created():
    raw = json.dumps({
        "type": "category_update",
        "payload": {"action": "created", "category": {
            "id": "c1", "title": "Work", "userId": "u1",
            "createdAt": "2024-01-01T00:00:00Z", "updatedAt": "2024-01-01T00:00:00Z",
        }},
        "user_id": "u1",
    })
    env = decode_frame(raw)
    assert isinstance(env, CategoryUpdate)
    assert env.action == "created"
    assert env.subject_id == "c1"
    assert env.owner_user_id == "u1"
    assert env.recipient_user_id == "u1"
    assert env.payload.category.created_at == "2024-01-01T00:00:00Z"


def test_decodes_deleted_identity_only():
    env = decode_frame('{"type": "category_update", "payload": {"action": "deleted", "categoryId": "c9"}}')
    assert isinstance(env.payload, CategoryDeleted)
    assert env.subject_id == "c9"
    assert env.owner_user_id is None
    assert env.recipient_user_id is None


def test_statement_accepts_title_spelling():
    env = decode_frame(json.dumps({
        "type": "statement_update",
        "payload": {"action": "updated", "statement": {
            "id": "s1", "title": "Call mom", "userId": "u1", "categoryId": "c2",
        }},
    }))
    assert isinstance(env, StatementUpdate)
    assert env.payload.statement.text == "Call mom"
    assert env.payload.statement.category_id == "c2"


def test_decodes_bytes_and_ack():
    env = decode_frame(b'{"type": "ack", "payload": "Message received"}')
    assert isinstance(env, Ack)
    assert env.action is None


@pytest.mark.parametrize("raw", [
    "not json",
    b"\xff\xfe",
    "[1, 2, 3]",
    '{"type": "unknown_update", "payload": {}}',
    '{"type": "category_update", "payload": {"action": "archived"}}',
    '{"type": "category_update", "payload": {"action": "created"}}',
    '{"type": "statement_update", "payload": {"action": "deleted"}}',
])
def test_malformed_frames_raise(raw):
    with pytest.raises(MalformedFrame) as exc_info:
        decode_frame(raw)
    assert exc_info.value.code == "malformed_frame"


def test_encode_uses_wire_names():
    env = decode_frame(json.dumps({
        "type": "statement_update",
        "payload": {"action": "created", "statement": {
            "id": "s1", "text": "Call mom", "userId": "u1", "categoryId": "c1",
        }},
    }))
    assert isinstance(env.payload, StatementCreated)
    wire = json.loads(encode_frame(env))
    assert wire["payload"]["statement"]["ownerUserId"] == "u1"
    assert wire["payload"]["statement"]["categoryId"] == "c1"
    assert "user_id" not in wire
    assert json.loads(encode_frame({"type": "ping"})) == {"type": "ping"}
