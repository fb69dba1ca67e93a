"""ZMQ multipart framing for the bridge protocol.

Request (DEALER -> ROUTER)
    version, id, operation, argument

Reply (ROUTER -> DEALER)
    version, id, REP, payload_json

Notification (PUB -> SUB)
    version, envelope_json

The ROUTER side sees an identity frame ahead of the request frames and must
send it back ahead of the reply frames.
"""

from __future__ import annotations

import itertools
import threading
from typing import Optional, Sequence, Tuple

from ... import json
from ...protocol.fields import OPERATIONS, PROTOCOL_VERSION, REP


VERSION_BYTES = PROTOCOL_VERSION.encode()


class FramingError(ValueError):
    """A multipart message did not have the expected structure."""


_id_min = 0
_id_max = 0xFFFFFFFF
_id_lock = threading.Lock()
_id_ticker = itertools.count(_id_min)


def next_id() -> bytes:
    """ Return the next request identification number, as eight hex digits.
    """

    global _id_ticker
    _id_lock.acquire()
    id = next(_id_ticker)

    if id >= _id_max:
        _id_ticker = itertools.count(_id_min)

    _id_lock.release()

    id = '%08x' % (id)
    return id.encode()


def to_request_frames(msg_id: bytes, operation: str, argument: Optional[bytes] = None) -> Tuple[bytes, ...]:
    if argument is None:
        argument = b''
    return (VERSION_BYTES, msg_id, operation.encode(), argument)


def from_request_frames(parts: Sequence[bytes]) -> Tuple[bytes, str, Optional[bytes]]:
    """Decode request frames (identity prefix already removed) into
    (id, operation, argument).
    """

    if len(parts) != 4:
        raise FramingError(f"expected 4 request frames, got {len(parts)}")

    if parts[0] != VERSION_BYTES:
        raise FramingError(f"request is protocol {parts[0]!r}, recipient expects {VERSION_BYTES!r}")

    argument = parts[3] if parts[3] != b'' else None
    operation = parts[2].decode('utf-8', 'replace')
    if operation not in OPERATIONS:
        raise FramingError(f"unknown operation {operation!r}")

    return parts[1], operation, argument


def to_reply_frames(msg_id: bytes, value: Optional[str] = None, error: Optional[str] = None) -> Tuple[bytes, ...]:
    payload = json.dumps({'value': value, 'error': error})
    return (VERSION_BYTES, msg_id, REP.encode(), payload)


def from_reply_frames(parts: Sequence[bytes]) -> Tuple[bytes, Optional[str], Optional[str]]:
    """Decode reply frames into (id, value, error)."""

    if len(parts) != 4:
        raise FramingError(f"expected 4 reply frames, got {len(parts)}")

    if parts[0] != VERSION_BYTES:
        raise FramingError(f"reply is protocol {parts[0]!r}, recipient expects {VERSION_BYTES!r}")

    if parts[2] != REP.encode():
        raise FramingError(f"unexpected reply type {parts[2]!r}")

    try:
        payload = json.loads(parts[3])
    except json.DecodeError as e:
        raise FramingError(f"unreadable reply payload: {e}") from e

    if not isinstance(payload, dict):
        raise FramingError('reply payload must be a JSON object')

    return parts[1], payload.get('value'), payload.get('error')


def to_notify_frames(envelope: bytes) -> Tuple[bytes, ...]:
    return (VERSION_BYTES, envelope)


def from_notify_frames(parts: Sequence[bytes]) -> bytes:
    """Return the raw envelope carried by a notification."""

    if len(parts) != 2:
        raise FramingError(f"expected 2 notification frames, got {len(parts)}")

    if parts[0] != VERSION_BYTES:
        raise FramingError(f"notification is protocol {parts[0]!r}, recipient expects {VERSION_BYTES!r}")

    return parts[1]
