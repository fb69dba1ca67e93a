""" Value types exchanged across the transport boundary. Every type here is
    an immutable :class:`msgspec.Struct`; the field names are the Python
    spelling, the wire spelling is camelCase where the two differ.
"""

from typing import Any, Dict, Optional, Union

import msgspec

from .. import json


class Event(msgspec.Struct, frozen=True):
    """ A named, channel-scoped message. The *data* is opaque to this
        package; it is frequently JSON text produced by whoever published
        the event, see :func:`decode`.
    """

    channel: str
    event: str
    data: Optional[str] = None

    def decode(self):
        """ Interpret the *data* as JSON and return the result. Returns None
            if there is no data.
        """

        if self.data is None or self.data == '':
            return None

        return json.loads(self.data)


# end of class Event



class ConnectionStateChange(msgspec.Struct, frozen=True, rename='camel'):
    """ A transition between two connection states, as reported by the
        transport. The states are strings; see
        :class:`pushbridge.protocol.fields.ConnectionState` for the values
        a well-behaved transport will report.
    """

    previous_state: str
    current_state: str


class ConnectionError(msgspec.Struct, frozen=True):
    """ A semantic failure reported by the messaging backend, such as an
        authentication rejection. This is delivered to the registered error
        callback as data; it is never raised.
    """

    message: Optional[str] = None
    code: Optional[str] = None
    exception: Optional[str] = None


Notification = Union[Event, ConnectionStateChange, ConnectionError]


class InboundEnvelope(msgspec.Struct, frozen=True, rename='camel'):
    """ The raw shape of a notification arriving from the transport. Which
        kind of notification it carries is determined by which field is
        present, not by an explicit tag.
    """

    event: Optional[Event] = None
    connection_state_change: Optional[ConnectionStateChange] = None
    connection_error: Optional[ConnectionError] = None

    @property
    def is_event(self):
        return self.event is not None

    @property
    def is_connection_state_change(self):
        return self.connection_state_change is not None

    @property
    def is_connection_error(self):
        return self.connection_error is not None

    @property
    def notification(self):
        """ The single notification carried by this envelope, or None if the
            envelope is empty. If more than one field is populated the event
            wins, followed by the state change, followed by the error.
        """

        if self.event is not None:
            return self.event
        if self.connection_state_change is not None:
            return self.connection_state_change
        if self.connection_error is not None:
            return self.connection_error
        return None


# end of class InboundEnvelope



class InitArgs(msgspec.Struct, frozen=True, rename='camel'):

    app_key: str
    options: Dict[str, Any]
    is_logging_enabled: bool = False


class BindArgs(msgspec.Struct, frozen=True, rename='camel'):
    """ Arguments for a bind, unbind, or trigger request. The *data* is only
        populated for a trigger.
    """

    channel_name: str
    event_name: str
    data: Optional[str] = None


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
