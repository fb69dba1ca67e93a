""" The :class:`Client` is the hub for a single logical connection to the
    messaging backend: it owns the connection lifecycle callbacks, submits
    requests to the transport, and routes inbound notifications to whichever
    callback is interested in them.
"""

import concurrent.futures
import logging
import threading

from . import config
from . import transport as transports
from .channel import Channel
from .protocol import codec
from .protocol.message import ConnectionError, ConnectionStateChange, Event
from .registry import Registry


logger = logging.getLogger(__name__)


class PreconditionError(ValueError):
    """ A required argument was not provided.
    """


class Client:
    """ A :class:`Client` instance is created once, and passed by reference
        to whatever needs it. It is not connected to anything until
        :func:`init` and :func:`connect` have been called.

        Every request method returns a :class:`concurrent.futures.Future`
        without waiting. The Future completes once the request has been
        handed to the transport; it says nothing about whether the backend
        has acted upon it. Requests reach the transport in the order they
        were made. A :class:`pushbridge.transport.TransportError` raised for
        one request is only visible via the Future for that request.

        :ivar registry: The :class:`Registry` of event bindings.
        :ivar state: The most recently reported connection state, as a
            string; None if no state change has been reported.
        :ivar transport: The :class:`pushbridge.transport.Transport`.
    """

    def __init__(self, transport=None):

        if transport is None:
            transport = transports.create()

        self.transport = transport
        self.registry = Registry()
        self.state = None
        self.initialized = False
        self.logging_enabled = False

        self._on_connection_state_change = None
        self._on_error = None
        self._slots_lock = threading.Lock()

        # A single worker preserves the ordering of requests.

        self._requests = concurrent.futures.ThreadPoolExecutor(max_workers=1)


    def _submit(self, method, *args):

        return self._requests.submit(method, *args)


    def init(self, app_key, options, logging_enabled=False):
        """ One-time setup: establish the *app_key* and connection *options*
            with the transport. The *options* can be a
            :class:`pushbridge.config.Options` instance or an equivalent
            dictionary. Set *logging_enabled* to True to request verbose
            logging from the transport, and to log every dispatched
            notification locally at the DEBUG level.
        """

        if app_key is None:
            raise PreconditionError('app_key must be specified')

        if options is None:
            raise PreconditionError('options must be specified')

        if self.initialized:
            raise PreconditionError('init() has already been called')

        options = config.from_dict(options)
        payload = codec.encode_init(app_key, options, logging_enabled)

        self.logging_enabled = bool(logging_enabled)
        self.initialized = True

        # Listen first, so that nothing the transport emits in response to
        # the init request is lost.

        self.transport.listen(self.on_notification)
        return self._submit(self.transport.init, payload)


    def connect(self, on_connection_state_change=None, on_error=None):
        """ Request a connection. Connection state changes and errors are
            delivered to *on_connection_state_change* and *on_error*,
            replacing any callbacks from a previous call.
        """

        self._slots_lock.acquire()
        self._on_connection_state_change = on_connection_state_change
        self._on_error = on_error
        self._slots_lock.release()

        return self._submit(self.transport.connect)


    def disconnect(self):
        """ Request disconnection. Bindings and lifecycle callbacks are left
            in place for a subsequent :func:`connect`.
        """

        return self._submit(self.transport.disconnect)


    def subscribe(self, channel_name):
        """ Request a subscription to *channel_name* and immediately return a
            :class:`Channel` for it. Bindings may be made on the returned
            Channel before the subscription is confirmed.
        """

        if channel_name is None:
            raise PreconditionError('channel_name must be specified')

        future = self._submit(self.transport.subscribe, channel_name)
        return Channel(self, channel_name, future)


    def unsubscribe(self, channel_name):
        """ Request that the subscription to *channel_name* be discontinued.
            Bindings for the channel are not removed; see
            :func:`clear_bindings`.
        """

        if channel_name is None:
            raise PreconditionError('channel_name must be specified')

        return self._submit(self.transport.unsubscribe, channel_name)


    def clear_bindings(self, channel_name):
        """ Remove every binding for *channel_name* and request an unbind for
            each. The returned Future completes when all of those requests
            have been handed to the transport. Every unbind is attempted; if
            any of them failed, the first failure is raised from the Future.
        """

        events = self.registry.clear(channel_name)
        payloads = [codec.encode_bind(channel_name, event) for event in events]

        return self._submit(self._unbind_each, payloads)


    def _unbind_each(self, payloads):

        failure = None

        for payload in payloads:
            try:
                self.transport.unbind(payload)
            except Exception as e:
                if failure is None:
                    failure = e

        if failure is not None:
            raise failure


    def get_users(self, channel_name):
        """ Request the member list of a presence channel. The result of the
            Future is whatever the transport returned, unparsed, possibly None.
        """

        if channel_name is None:
            raise PreconditionError('channel_name must be specified')

        return self._submit(self.transport.get_users, channel_name)


    def _bind(self, channel_name, event_name, on_event):

        if on_event is None:
            raise PreconditionError('a callback is required to bind ' + repr(event_name))

        payload = codec.encode_bind(channel_name, event_name)

        # Register before submitting the request, so that an event arriving
        # immediately after the bind takes effect finds the callback.

        self.registry.register(channel_name, event_name, on_event)
        return self._submit(self.transport.bind, payload)


    def _unbind(self, channel_name, event_name):

        payload = codec.encode_bind(channel_name, event_name)
        self.registry.unregister(channel_name, event_name)
        return self._submit(self.transport.unbind, payload)


    def _trigger(self, channel_name, event_name, data):

        payload = codec.encode_bind(channel_name, event_name, data)
        return self._submit(self.transport.trigger, payload)


    def on_notification(self, raw):
        """ Handle one raw envelope from the transport's notification stream.
            A malformed envelope is logged and dropped; a notification with
            nobody listening for it is dropped silently. Exceptions raised by
            application callbacks are logged and go no further.
        """

        try:
            notification = codec.decode_inbound(raw)
        except codec.ParseError as e:
            logger.warning("dropping notification: %s", e)
            return

        if self.logging_enabled:
            logger.debug("notification: %r", notification)

        if isinstance(notification, Event):
            callback = self.registry.lookup(notification.channel, notification.event)
        elif isinstance(notification, ConnectionStateChange):
            self.state = notification.current_state
            self._slots_lock.acquire()
            callback = self._on_connection_state_change
            self._slots_lock.release()
        elif isinstance(notification, ConnectionError):
            self._slots_lock.acquire()
            callback = self._on_error
            self._slots_lock.release()
        else:
            callback = None

        if callback is None:
            return

        try:
            callback(notification)
        except Exception:
            logger.exception("callback failed for %r", notification)


    def close(self):
        """ Wait for any submitted requests to reach the transport, then
            close the transport. Optional; process exit accomplishes the same.
        """

        self._requests.shutdown(wait=True)
        self.transport.close()


# end of class Client


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
