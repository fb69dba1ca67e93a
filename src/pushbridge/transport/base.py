"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`pushbridge.protocol` so the protocol remains
transport-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..protocol import fields


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportTimeout(TransportError):
    """A request was not acknowledged in a timely fashion."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


Listener = Callable[[bytes], None]


class Transport(ABC):
    """Minimal contract for the boundary with the messaging backend.

    Request methods return once the request has been handed off; they do
    not wait for the backend to act on it. Failures are raised as
    :class:`TransportError`. Inbound notifications are delivered, one at a
    time and in arrival order, to the single callback attached via
    :func:`listen`.
    """

    def __init__(self) -> None:
        self.listener: Optional[Listener] = None

    def listen(self, callback: Listener) -> None:
        """Attach the consumer of the notification stream."""
        self.listener = callback

    def deliver(self, raw: bytes) -> None:
        """Hand one raw envelope to the attached listener, if any."""
        listener = self.listener
        if listener is not None:
            listener(raw)

    @abstractmethod
    def request(self, operation: str, argument: Optional[bytes] = None) -> Optional[str]:
        """Submit one named operation with its encoded argument."""

    def close(self) -> None:
        """Release any resources held by the transport."""

    # Named operations, all expressed in terms of request().

    def init(self, payload: bytes) -> None:
        self.request(fields.INIT, payload)

    def connect(self) -> None:
        self.request(fields.CONNECT)

    def disconnect(self) -> None:
        self.request(fields.DISCONNECT)

    def subscribe(self, channel_name: str) -> None:
        self.request(fields.SUBSCRIBE, channel_name.encode())

    def unsubscribe(self, channel_name: str) -> None:
        self.request(fields.UNSUBSCRIBE, channel_name.encode())

    def get_users(self, channel_name: str) -> Optional[str]:
        return self.request(fields.GET_USERS, channel_name.encode())

    def bind(self, payload: bytes) -> None:
        self.request(fields.BIND, payload)

    def unbind(self, payload: bytes) -> None:
        self.request(fields.UNBIND, payload)

    def trigger(self, payload: bytes) -> None:
        self.request(fields.TRIGGER, payload)
