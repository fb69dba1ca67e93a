"""In-process transport.

Nothing leaves the process: requests are recorded, and notifications are
injected by calling :func:`Loopback.notify`. Useful for tests, and for
exercising application callbacks without a bridge process.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional, Set, Tuple, Union

from ..protocol import codec, fields
from ..protocol.message import ConnectionStateChange, Notification
from .base import Transport, TransportError


class Loopback(Transport):
    """Record every request; answer getUsers from :attr:`users`.

    :ivar requests: (operation, argument) tuples, in submission order.
    :ivar users: Raw getUsers results keyed by channel name.
    :ivar failures: Operations that raise :class:`TransportError`.
    :ivar echo_state: If True, connect and disconnect requests produce the
        matching connection state change notifications.

    Notifications are delivered one at a time on the thread calling
    :func:`notify`; a callback may itself call :func:`notify`. With
    *echo_state* set, state changes are delivered on the thread running the
    connect or disconnect request, so a callback must not block waiting for
    a request Future while another thread is delivering.
    """

    def __init__(self, echo_state: bool = False):
        Transport.__init__(self)
        self.requests: List[Tuple[str, Optional[bytes]]] = []
        self.users: Dict[str, Optional[str]] = {}
        self.failures: Set[str] = set()
        self.echo_state = echo_state
        self.closed = False
        self.state = 'disconnected'

        self._lock = threading.Lock()
        self._deliver_lock = threading.RLock()

    def request(self, operation: str, argument: Optional[bytes] = None) -> Optional[str]:
        if self.closed:
            raise TransportError('transport is closed')

        if operation in self.failures:
            raise TransportError(f"{operation}: simulated failure")

        with self._lock:
            self.requests.append((operation, argument))

        if operation == fields.GET_USERS:
            return self.users.get(argument.decode())

        if self.echo_state and operation == fields.CONNECT:
            self._transition('connecting')
            self._transition('connected')
        elif self.echo_state and operation == fields.DISCONNECT:
            self._transition('disconnecting')
            self._transition('disconnected')

        return None

    def _transition(self, state: str) -> None:
        change = ConnectionStateChange(previous_state=self.state, current_state=state)
        self.state = state
        self.notify(change)

    def notify(self, notification: Union[bytes, str, Notification, None]) -> None:
        """Deliver one notification. Raw bytes or str are passed through
        unmodified; a protocol value is wrapped in an envelope first.
        """

        if isinstance(notification, str):
            raw = notification.encode()
        elif isinstance(notification, bytes):
            raw = notification
        else:
            raw = codec.encode_inbound(notification)

        with self._deliver_lock:
            self.deliver(raw)

    def operations(self) -> List[str]:
        """The recorded operation names, in order."""
        with self._lock:
            return [operation for operation, _argument in self.requests]

    def close(self) -> None:
        self.closed = True
