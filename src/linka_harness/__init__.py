"""
linka-harness — notification test harness for the linka.type backend.

Push-channel connection, ordered message log and predicate waiters for
verifying category/statement notifications.
"""

from linka_harness.client import HarnessClient
from linka_harness.config import HarnessSettings
from linka_harness.errors import (
    ApiError,
    AuthRejected,
    ContractViolation,
    HandshakeTimeout,
    HarnessError,
    MalformedFrame,
    NetworkError,
    UnexpectedMessage,
    WaitTimeout,
)
from linka_harness.message_log import MessageLog
from linka_harness.models.envelope import Action, EnvelopeType
from linka_harness.transport.websocket import Connection, ConnectionState
from linka_harness.waiter import expect_no_message, wait_for, wait_for_action, wait_for_type

__version__ = "0.1.0"
__all__ = [
    "HarnessClient",
    "HarnessSettings",
    "Connection",
    "ConnectionState",
    "MessageLog",
    "wait_for",
    "wait_for_type",
    "wait_for_action",
    "expect_no_message",
    "Action",
    "EnvelopeType",
    "HarnessError",
    "AuthRejected",
    "HandshakeTimeout",
    "NetworkError",
    "WaitTimeout",
    "MalformedFrame",
    "UnexpectedMessage",
    "ContractViolation",
    "ApiError",
]
