"""
Frame decoding and encoding for the push channel.
"""

import json
from typing import Any, Union

from pydantic import ValidationError

from linka_harness.errors import MalformedFrame
from linka_harness.models.envelope import ENVELOPE_ADAPTER, Envelope


def decode_frame(raw: Union[str, bytes]) -> Envelope:
    """Parse one inbound text/binary frame. Raises MalformedFrame if invalid."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedFrame(f"Frame is not UTF-8: {e}", raw=bytes(raw[:200])) from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedFrame(f"Frame is not JSON: {e}", raw=raw[:200]) from e
    if not isinstance(data, dict):
        raise MalformedFrame("Frame is not a JSON object", raw=raw[:200])
    try:
        return ENVELOPE_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise MalformedFrame(
            f"Frame does not match the envelope schema ({e.error_count()} errors)", raw=raw[:200],
        ) from e


def encode_frame(message: Any) -> str:
    """Serialize an outbound message. Envelope models use their wire aliases."""
    if hasattr(message, "model_dump"):
        message = message.model_dump(by_alias=True, exclude_none=True)
    return json.dumps(message)
