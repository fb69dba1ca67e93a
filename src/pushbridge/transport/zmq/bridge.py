"""ZeroMQ bridge transport.

The messaging backend protocol is spoken by a companion bridge process. This
transport issues requests to the bridge over a DEALER socket, waiting only
for the bridge to confirm it accepted each request, and receives the bridge's
notification stream over a SUB socket on a background thread.
"""

from __future__ import annotations

import atexit
import logging
import threading
from typing import Optional

import zmq

from ... import config
from ..base import Transport, TransportConnectionError, TransportError, TransportTimeout
from .framing import FramingError, from_notify_frames, from_reply_frames, next_id, to_request_frames


logger = logging.getLogger(__name__)

zmq_context = zmq.Context()


class Bridge(Transport):
    """Requests via DEALER, notifications via SUB.

    *request_address* and *notify_address* default to the values from
    :mod:`pushbridge.config`. *timeout* is the number of seconds to wait
    for the bridge to confirm a request.
    """

    timeout = 5.0

    def __init__(self, request_address: Optional[str] = None, notify_address: Optional[str] = None, timeout: Optional[float] = None):
        Transport.__init__(self)

        if request_address is None:
            request_address = config.request_address()
        if notify_address is None:
            notify_address = config.notify_address()
        if timeout is not None:
            self.timeout = float(timeout)

        self.request_address = request_address
        self.notify_address = notify_address

        try:
            self.socket = zmq_context.socket(zmq.DEALER)
            self.socket.setsockopt(zmq.LINGER, 0)
            self.socket.identity = f"pushbridge.Bridge.{id(self)}".encode()
            self.socket.connect(request_address)

            self.notifications = zmq_context.socket(zmq.SUB)
            self.notifications.setsockopt(zmq.LINGER, 0)
            self.notifications.setsockopt(zmq.SUBSCRIBE, b'')
            self.notifications.connect(notify_address)
        except zmq.ZMQError as e:
            raise TransportConnectionError(f"cannot reach bridge: {e}") from e

        # ZeroMQ sockets are not thread-safe; only one request is on the
        # wire at any given moment.

        self.socket_lock = threading.Lock()

        self.shutdown = False
        self.thread = threading.Thread(target=self.run, daemon=True)
        self.thread.start()

        _active.add(self)

    def request(self, operation: str, argument: Optional[bytes] = None) -> Optional[str]:
        if self.shutdown:
            raise TransportError('transport is closed')

        msg_id = next_id()
        frames = to_request_frames(msg_id, operation, argument)

        with self.socket_lock:
            try:
                self.socket.send_multipart(frames)
                value, error = self._wait_reply(msg_id, operation)
            except zmq.ZMQError as e:
                raise TransportConnectionError(f"{operation}: {e}") from e

        if error is not None:
            raise TransportError(f"{operation}: {error}")

        return value

    def _wait_reply(self, msg_id: bytes, operation: str):
        """Receive replies until the one for *msg_id* arrives. Replies left
        over from requests that previously timed out are discarded.
        """

        poller = zmq.Poller()
        poller.register(self.socket, zmq.POLLIN)
        milliseconds = int(self.timeout * 1000)

        while True:
            if not poller.poll(milliseconds):
                raise TransportTimeout(
                    f"{operation} @ {self.request_address}: no reply in {self.timeout:.2f} sec"
                )

            parts = self.socket.recv_multipart()

            try:
                reply_id, value, error = from_reply_frames(parts)
            except FramingError as e:
                logger.warning("discarding reply from %s: %s", self.request_address, e)
                continue

            if reply_id == msg_id:
                return value, error

            logger.debug("discarding stale reply %r", reply_id)

    def run(self) -> None:
        poller = zmq.Poller()
        poller.register(self.notifications, zmq.POLLIN)

        while not self.shutdown:
            try:
                sockets = dict(poller.poll(1000))
            except zmq.ZMQError:
                if self.shutdown:
                    break
                raise

            if self.notifications not in sockets:
                continue

            parts = self.notifications.recv_multipart()

            try:
                raw = from_notify_frames(parts)
            except FramingError as e:
                logger.warning("dropping notification from %s: %s", self.notify_address, e)
                continue

            try:
                self.deliver(raw)
            except Exception:
                logger.exception("notification listener failed")

    def close(self) -> None:
        if self.shutdown:
            return

        self.shutdown = True
        _active.discard(self)

        if self.thread is not threading.current_thread():
            self.thread.join(2)

        with self.socket_lock:
            self.socket.close()
        self.notifications.close()


# end of class Bridge


_active = set()


def _cleanup() -> None:
    for bridge in list(_active):
        bridge.close()


atexit.register(_cleanup)
