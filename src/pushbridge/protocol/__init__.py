"""
pushbridge protocol layer
=========================

Defines the messages exchanged with a transport: the arguments for outgoing
requests and the envelopes for inbound notifications. Nothing in this
package routes, stores, or sends anything.

The protocol layer MUST NOT depend on any transport implementation.

    fields.py    Canonical names: request operations, version, prefixes
    message.py   Immutable value types (Event, ConnectionStateChange, ...)
    codec.py     Value types <-> wire bytes
"""

from . import fields
from . import message
from . import codec

from .codec import ParseError
from .fields import ConnectionState, PROTOCOL_VERSION
from .message import (
    BindArgs,
    ConnectionError,
    ConnectionStateChange,
    Event,
    InboundEnvelope,
    InitArgs,
)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
