"""
Harness error types.

Handshake failures reject Connection.open() directly, WaitTimeout is the
expected outcome of negative assertions, MalformedFrame never leaves the
connection's reader task.
"""

from typing import Any, Optional


class HarnessError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class AuthRejected(HarnessError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("auth_rejected", message, details)


class HandshakeTimeout(HarnessError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("handshake_timeout", message, details)


class NetworkError(HarnessError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("network_error", message, details)


class WaitTimeout(HarnessError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("wait_timeout", message, details)


class MalformedFrame(HarnessError):
    def __init__(self, message: str, raw: Any = None):
        super().__init__("malformed_frame", message, {"raw": raw} if raw is not None else None)


class UnexpectedMessage(HarnessError):
    """A negative assertion saw a matching envelope."""

    def __init__(self, message: str, envelope: Any = None):
        super().__init__("unexpected_message", message)
        self.envelope = envelope


class ContractViolation(HarnessError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("contract_violation", message, details)


class ApiError(HarnessError):
    """Non-2xx response from the REST interface."""

    def __init__(self, status: int, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("http_error", message, details)
        self.status = status
