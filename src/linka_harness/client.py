"""
HarnessClient — one test identity: REST APIs plus one push connection.

Each test fixture owns its clients and closes them at teardown; nothing is
shared between scenarios.
"""

import logging
import secrets
import time
from typing import Any, Optional

import httpx

from linka_harness.auth import Auth
from linka_harness.config import HarnessSettings
from linka_harness.errors import NetworkError
from linka_harness.resources import CategoriesAPI, StatementsAPI
from linka_harness.transport.http import HttpClient
from linka_harness.transport.websocket import Connection

logger = logging.getLogger(__name__)


def generate_test_email() -> str:
    return f"test-{int(time.time() * 1000)}-{secrets.token_hex(5)}@example.com"


def generate_test_password() -> str:
    return f"Password123!-{secrets.token_hex(5)}"


class HarnessClient:
    def __init__(
        self,
        settings: Optional[HarnessSettings] = None,
        token: Optional[str] = None,
        user_id: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or HarnessSettings.from_env()
        self.user_id = user_id
        self.email: Optional[str] = None

        self.http = HttpClient(base_url=self.settings.base_url, token=token, transport=transport)
        self.auth = Auth(self.http)
        self.categories = CategoriesAPI(self.http)
        self.statements = StatementsAPI(self.http)

        self._connection: Optional[Connection] = None

    def __repr__(self) -> str:
        return f"HarnessClient(user_id={self.user_id!r}, connected={self.connected})"

    @property
    def token(self) -> Optional[str]:
        return self.http.token

    @property
    def connected(self) -> bool:
        return self._connection is not None and self._connection.connected

    @property
    def connection(self) -> Connection:
        if self._connection is None:
            raise NetworkError("No push connection. Call connect() first.")
        return self._connection

    async def sign_up(self, email: Optional[str] = None, password: Optional[str] = None) -> dict[str, Any]:
        """Register a fresh user and keep its token."""
        self.email = email or generate_test_email()
        result = await self.auth.register(self.email, password or generate_test_password())
        self.user_id = result["user"]["id"]
        logger.debug("Registered %s as %s", self.email, self.user_id)
        return result

    async def login(self, email: str, password: str) -> dict[str, Any]:
        result = await self.auth.login(email, password)
        self.email = email
        self.user_id = result["user"]["id"]
        return result

    async def connect(self) -> Connection:
        """Open (or reopen) the push connection. The message log is kept across reopens.

        A reopen authenticates with the current token, e.g. after login().
        """
        if self._connection is None:
            self._connection = Connection(
                self.settings.ws_url,
                self.token,
                open_timeout=self.settings.open_timeout,
                wait_timeout=self.settings.wait_timeout,
            )
        else:
            self._connection.set_token(self.token)
        await self._connection.open()
        return self._connection

    async def disconnect(self) -> None:
        if self._connection is not None:
            await self._connection.close()

    async def aclose(self) -> None:
        try:
            await self.disconnect()
        finally:
            await self.http.close()

    async def __aenter__(self) -> "HarnessClient":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()
