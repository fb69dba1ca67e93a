"""Translate between protocol value types and their wire representation.

Everything here is a pure function: bytes in, values out, or the reverse.
"""

from __future__ import annotations

from typing import Optional, Union

import msgspec

from .. import config
from .message import (
    BindArgs,
    ConnectionError,
    ConnectionStateChange,
    Event,
    InboundEnvelope,
    InitArgs,
    Notification,
)


class ParseError(ValueError):
    """An inbound envelope could not be decoded into the expected shape."""


_encoder = msgspec.json.Encoder()
_envelope_decoder = msgspec.json.Decoder(InboundEnvelope)


def encode_init(app_key: str, options: config.Options, logging_enabled: bool = False) -> bytes:
    """Serialize the arguments for the one-time init request."""

    args = InitArgs(
        app_key=app_key,
        options=config.to_dict(options),
        is_logging_enabled=bool(logging_enabled),
    )
    return _encoder.encode(args)


def encode_bind(channel_name: str, event_name: str, data: Optional[str] = None) -> bytes:
    """Serialize a bind, unbind, or trigger request. Only a trigger carries data."""

    args = BindArgs(channel_name=channel_name, event_name=event_name, data=data)
    return _encoder.encode(args)


def decode_envelope(raw: Union[bytes, str]) -> InboundEnvelope:
    """Decode *raw* into an :class:`InboundEnvelope`, raising :class:`ParseError`
    if it is not a JSON object of the expected shape.
    """

    if raw is None:
        raise ParseError('empty envelope')

    try:
        return _envelope_decoder.decode(raw)
    except (msgspec.DecodeError, UnicodeDecodeError) as e:
        raise ParseError('malformed envelope: ' + str(e)) from e


def decode_inbound(raw: Union[bytes, str]) -> Optional[Notification]:
    """Decode *raw* and return the single notification it carries: an
    :class:`Event`, a :class:`ConnectionStateChange`, a :class:`ConnectionError`,
    or None for an envelope with none of the three fields.
    """

    return decode_envelope(raw).notification


def encode_inbound(notification: Optional[Notification]) -> bytes:
    """Wrap *notification* in an envelope and serialize it. This is the
    inverse of :func:`decode_inbound`, for transports that originate
    notifications locally.
    """

    if notification is None:
        envelope = InboundEnvelope()
    elif isinstance(notification, Event):
        envelope = InboundEnvelope(event=notification)
    elif isinstance(notification, ConnectionStateChange):
        envelope = InboundEnvelope(connection_state_change=notification)
    elif isinstance(notification, ConnectionError):
        envelope = InboundEnvelope(connection_error=notification)
    else:
        raise TypeError('not a notification: ' + repr(notification))

    return _encoder.encode(envelope)
