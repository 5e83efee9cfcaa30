"""
Predicate waiter — block until an envelope matching (type, predicate) is in a log.

Matching policy: the FIRST matching envelope in arrival order. The current
log is scanned before the waiter registers for appends, with no suspension
point in between, so a match that arrived before the call is found exactly
like one that arrives while waiting. Waiting never removes anything from the
log; any number of waiters may be outstanding on the same log.
"""

import asyncio
import logging
from typing import Callable, Optional

from linka_harness.errors import UnexpectedMessage, WaitTimeout
from linka_harness.message_log import MessageLog
from linka_harness.models.envelope import Envelope

logger = logging.getLogger(__name__)

Predicate = Callable[[Envelope], bool]

DEFAULT_WAIT_TIMEOUT = 10.0


def _matcher(event_type: str, predicate: Optional[Predicate]) -> Predicate:
    def matches(envelope: Envelope) -> bool:
        if envelope.type != event_type:
            return False
        if predicate is None:
            return True
        try:
            return bool(predicate(envelope))
        except Exception as e:
            logger.warning("Predicate raised on %s, treating as no match: %s", envelope.type, e)
            return False
    return matches


async def wait_for(
    log: MessageLog,
    event_type: str,
    predicate: Optional[Predicate] = None,
    timeout: float = DEFAULT_WAIT_TIMEOUT,
) -> Envelope:
    """Return the first envelope of `event_type` satisfying `predicate`.

    Raises WaitTimeout if none is in the log within `timeout` seconds of the
    call. The log is never modified.
    """
    matches = _matcher(event_type, predicate)
    for envelope in log.snapshot():
        if matches(envelope):
            return envelope

    found: asyncio.Future[Envelope] = asyncio.get_running_loop().create_future()

    def on_append(envelope: Envelope) -> None:
        if not found.done() and matches(envelope):
            found.set_result(envelope)

    remove_listener = log.add_listener(on_append)
    try:
        return await asyncio.wait_for(found, timeout=timeout)
    except asyncio.TimeoutError:
        raise WaitTimeout(
            f"Timeout waiting for message type: {event_type}"
            + (" with specific payload" if predicate is not None else ""),
            details={"type": event_type, "timeout": timeout},
        ) from None
    finally:
        remove_listener()


async def wait_for_type(log: MessageLog, event_type: str, timeout: float = DEFAULT_WAIT_TIMEOUT) -> Envelope:
    return await wait_for(log, event_type, None, timeout)


async def wait_for_action(
    log: MessageLog, event_type: str, action: str, timeout: float = DEFAULT_WAIT_TIMEOUT,
) -> Envelope:
    """Wait for an envelope of `event_type` whose payload.action == `action`."""
    return await wait_for(log, event_type, lambda env: env.action == action, timeout)


async def expect_no_message(
    log: MessageLog,
    event_type: str,
    predicate: Optional[Predicate] = None,
    timeout: float = 3.0,
) -> None:
    """Negative assertion: no matching envelope may appear within `timeout`.

    Raises UnexpectedMessage with the offending envelope otherwise.
    """
    try:
        envelope = await wait_for(log, event_type, predicate, timeout)
    except WaitTimeout:
        return None
    raise UnexpectedMessage(f"Unexpected {event_type} message: {envelope.action}", envelope=envelope)
