"""
Append-only, arrival-ordered log of decoded envelopes for one connection.

The connection's reader task is the only writer. Waiters read it through
snapshot() and add_listener(); append() stores the envelope before any
listener runs, and both happen without yielding to the event loop.
"""

import logging
from typing import Callable

from linka_harness.models.envelope import Envelope

logger = logging.getLogger(__name__)

Listener = Callable[[Envelope], None]


class MessageLog:
    def __init__(self) -> None:
        self._entries: list[Envelope] = []
        self._listeners: list[Listener] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"MessageLog(entries={len(self._entries)}, listeners={len(self._listeners)})"

    def append(self, envelope: Envelope) -> None:
        self._entries.append(envelope)
        logger.debug("Appended %s #%d", envelope.type, len(self._entries))
        for listener in list(self._listeners):
            try:
                listener(envelope)
            except Exception:
                logger.exception("Log listener failed on %s", envelope.type)

    def snapshot(self) -> tuple[Envelope, ...]:
        """Read-only copy of the log at this instant."""
        return tuple(self._entries)

    def clear(self) -> None:
        """Reset to empty. Outstanding listeners stay registered."""
        self._entries = []

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Call `listener` on every future append. Returns a cleanup function."""
        self._listeners.append(listener)

        def remove() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass
        return remove
