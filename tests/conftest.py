"""Shared test fixtures."""

from typing import AsyncIterator, Awaitable, Callable

import pytest
import pytest_asyncio

from linka_harness import Connection, HarnessClient, HarnessSettings
from linka_harness.models.envelope import ENVELOPE_ADAPTER, Envelope

from tests.fake_service import FakeNotificationService


def make_envelope(raw: dict) -> Envelope:
    return ENVELOPE_ADAPTER.validate_python(raw)


def category_event(action: str, category_id: str = "c1", title: str = "Work", user_id: str = "u1") -> Envelope:
    if action == "deleted":
        payload = {"action": "deleted", "categoryId": category_id}
    else:
        payload = {"action": action, "category": {"id": category_id, "title": title, "userId": user_id}}
    return make_envelope({"type": "category_update", "payload": payload, "user_id": user_id})


def statement_event(
    action: str, statement_id: str = "s1", text: str = "Call mom", category_id: str = "c1", user_id: str = "u1",
) -> Envelope:
    if action == "deleted":
        payload = {"action": "deleted", "statementId": statement_id}
    else:
        payload = {"action": action, "statement": {
            "id": statement_id, "text": text, "userId": user_id, "categoryId": category_id,
        }}
    return make_envelope({"type": "statement_update", "payload": payload, "user_id": user_id})


@pytest_asyncio.fixture
async def service() -> AsyncIterator[FakeNotificationService]:
    fake = FakeNotificationService()
    await fake.start()
    yield fake
    await fake.stop()


@pytest_asyncio.fixture
async def open_connection(service) -> AsyncIterator[Callable[[str], Awaitable[Connection]]]:
    """Factory: open a registered push connection for a user id. Closed at teardown."""
    opened: list[Connection] = []

    async def _open(user_id: str) -> Connection:
        conn = Connection(service.ws_url, service.issue_token(user_id), open_timeout=2.0)
        opened.append(conn)
        expected = service.connection_count(user_id) + 1
        await conn.open()
        await service.wait_for_connections(user_id, count=expected)
        return conn

    yield _open
    for conn in opened:
        await conn.close()


@pytest_asyncio.fixture
async def make_user(service) -> AsyncIterator[Callable[[], Awaitable[HarnessClient]]]:
    """Factory: a signed-up HarnessClient with an open push connection."""
    clients: list[HarnessClient] = []
    settings = HarnessSettings(base_url=service.base_url, open_timeout=2.0, wait_timeout=5.0)

    async def _make() -> HarnessClient:
        client = HarnessClient(settings=settings, transport=service.transport())
        clients.append(client)
        await client.sign_up()
        await client.connect()
        await service.wait_for_connections(client.user_id)
        return client

    yield _make
    for client in clients:
        await client.aclose()


@pytest.fixture
def settings_env(monkeypatch):
    for key in ("LINKA_BASE_URL", "LINKA_WS_PATH", "LINKA_OPEN_TIMEOUT", "LINKA_WAIT_TIMEOUT"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
