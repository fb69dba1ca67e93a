""" Python client for publish/subscribe realtime messaging. A :class:`Client`
    manages one logical connection, the channels subscribed through it, and
    the callbacks bound to events on those channels; the network protocol is
    left to a transport.
"""

# Utility components.

from . import json

# Submodules used by multiple other components.

from . import config
from . import protocol
from . import transport

# Primary public-facing interfaces.

from .channel import Channel
from .client import Client, PreconditionError
from .config import Auth, Options
from .protocol import (
    ConnectionError,
    ConnectionState,
    ConnectionStateChange,
    Event,
    ParseError,
)
from .registry import Registry
from .transport import TransportError

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
