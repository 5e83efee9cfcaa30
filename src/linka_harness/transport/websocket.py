"""
Push-channel connection manager.

Connection: ws://{host}/api/ws with `Authorization: Bearer <token>`.
One Connection per test identity. Inbound frames are decoded into envelopes
and appended to the connection's MessageLog while the state is OPEN.
"""

import asyncio
import enum
import logging
from typing import Any, Optional

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, InvalidStatus, WebSocketException

from linka_harness.errors import AuthRejected, HandshakeTimeout, MalformedFrame, NetworkError
from linka_harness.message_log import MessageLog
from linka_harness.models.envelope import Envelope
from linka_harness.transport.frames import decode_frame, encode_frame
from linka_harness import waiter

logger = logging.getLogger(__name__)

DEFAULT_OPEN_TIMEOUT = 5.0
AUTH_REJECTED_STATUSES = {401, 403}


class ConnectionState(str, enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    OPEN = "open"


class Connection:
    def __init__(
        self,
        url: str,
        token: Optional[str],
        open_timeout: float = DEFAULT_OPEN_TIMEOUT,
        wait_timeout: float = waiter.DEFAULT_WAIT_TIMEOUT,
    ):
        self._url = url
        self._token = token
        self._open_timeout = open_timeout
        self._wait_timeout = wait_timeout
        # open() and close() run one at a time
        self._lock = asyncio.Lock()
        self._log = MessageLog()
        self._state = ConnectionState.DISCONNECTED
        self._ws: Optional[ClientConnection] = None
        self._reader: Optional[asyncio.Task[None]] = None
        self._opens = 0

    def __repr__(self) -> str:
        return f"Connection(url={self._url!r}, state={self._state.value}, reconnects={self.reconnects})"

    @property
    def url(self) -> str:
        return self._url

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def connected(self) -> bool:
        return self._state is ConnectionState.OPEN and self._ws is not None

    @property
    def reconnects(self) -> int:
        """Successful opens after the first one."""
        return max(self._opens - 1, 0)

    @property
    def log(self) -> MessageLog:
        return self._log

    def set_token(self, token: Optional[str]) -> None:
        """Credential for the next open(). An open transport keeps its handshake credential."""
        self._token = token

    async def open(self) -> None:
        """Handshake and start decoding frames into the log. No-op if already open.

        Concurrent calls share one handshake.
        """
        async with self._lock:
            await self._open()

    async def _open(self) -> None:
        if self.connected:
            return
        if not self._token:
            raise AuthRejected("Missing bearer credential")

        self._state = ConnectionState.CONNECTING
        try:
            ws = await connect(
                self._url,
                additional_headers={"Authorization": f"Bearer {self._token}"},
                open_timeout=self._open_timeout,
            )
        except InvalidStatus as e:
            self._state = ConnectionState.DISCONNECTED
            status = e.response.status_code
            if status in AUTH_REJECTED_STATUSES:
                raise AuthRejected(f"Handshake rejected with HTTP {status}", details={"status": status}) from e
            raise NetworkError(f"Handshake failed with HTTP {status}", details={"status": status}) from e
        except asyncio.TimeoutError as e:
            self._state = ConnectionState.DISCONNECTED
            raise HandshakeTimeout(
                f"WebSocket connection timeout after {self._open_timeout}s",
                details={"timeout": self._open_timeout},
            ) from e
        except (WebSocketException, OSError) as e:
            self._state = ConnectionState.DISCONNECTED
            raise NetworkError(f"WebSocket connection failed: {e}") from e
        except asyncio.CancelledError:
            self._state = ConnectionState.DISCONNECTED
            raise

        self._ws = ws
        self._opens += 1
        self._state = ConnectionState.OPEN
        self._reader = asyncio.create_task(self._read_frames(ws))
        logger.info("WebSocket connected: %s (reconnects=%d)", self._url, self.reconnects)

    async def _read_frames(self, ws: ClientConnection) -> None:
        try:
            async for raw in ws:
                if ws is not self._ws or self._state is not ConnectionState.OPEN:
                    break
                try:
                    envelope = decode_frame(raw)
                except MalformedFrame as e:
                    logger.warning("Dropping malformed frame: %s", e)
                    continue
                self._log.append(envelope)
            else:
                logger.info("WebSocket closed by server: %s", self._url)
        except ConnectionClosed as e:
            logger.warning("WebSocket closed: %s - %s", e.rcvd.code if e.rcvd else "none", e)
        except Exception:
            logger.exception("WebSocket reader failed: %s", self._url)
        finally:
            if ws is self._ws:
                self._ws = None
                self._state = ConnectionState.DISCONNECTED

    async def close(self) -> None:
        """Disconnect and release the transport. Closing a closed connection is a no-op.

        A handshake in progress completes first and is then closed.
        """
        async with self._lock:
            await self._close()

    async def _close(self) -> None:
        self._state = ConnectionState.DISCONNECTED
        ws, self._ws = self._ws, None
        reader, self._reader = self._reader, None
        if reader is not None and not reader.done():
            reader.cancel()
            try:
                await reader
            except asyncio.CancelledError:
                pass
        if ws is not None:
            await ws.close()
            logger.info("WebSocket disconnected: %s", self._url)

    async def send(self, message: Any) -> None:
        if not self.connected:
            raise NetworkError("WebSocket not connected")
        try:
            await self._ws.send(encode_frame(message))  # type: ignore[union-attr]
        except ConnectionClosed as e:
            raise NetworkError(f"Send failed, connection closed: {e}") from e

    async def __aenter__(self) -> "Connection":
        await self.open()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    # Log access

    def messages(self) -> tuple[Envelope, ...]:
        return self._log.snapshot()

    def clear_messages(self) -> None:
        self._log.clear()

    def _timeout(self, timeout: Optional[float]) -> float:
        return self._wait_timeout if timeout is None else timeout

    async def wait_for(
        self, event_type: str, predicate: Optional[waiter.Predicate] = None, timeout: Optional[float] = None,
    ) -> Envelope:
        """Like waiter.wait_for; `timeout` defaults to this connection's wait_timeout."""
        return await waiter.wait_for(self._log, event_type, predicate, self._timeout(timeout))

    async def wait_for_type(self, event_type: str, timeout: Optional[float] = None) -> Envelope:
        return await waiter.wait_for_type(self._log, event_type, self._timeout(timeout))

    async def wait_for_action(
        self, event_type: str, action: str, timeout: Optional[float] = None,
    ) -> Envelope:
        return await waiter.wait_for_action(self._log, event_type, action, self._timeout(timeout))

    async def expect_no_message(
        self, event_type: str, predicate: Optional[waiter.Predicate] = None, timeout: float = 3.0,
    ) -> None:
        await waiter.expect_no_message(self._log, event_type, predicate, timeout)
