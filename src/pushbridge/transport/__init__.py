"""Transport layer implementations."""

from .. import config

from .base import (
    Transport,
    TransportError,
    TransportTimeout,
    TransportConnectionError,
)
from .loopback import Loopback


def create(backend=None, **kwargs):
    """ Return a new transport instance. The *backend* defaults to the
        PUSHBRIDGE_TRANSPORT environment variable, which defaults to 'zmq';
        any keyword arguments are passed to the transport's constructor.
    """

    if backend is None:
        backend = config.transport_backend()

    if backend == 'zmq':
        from .zmq import Bridge
        return Bridge(**kwargs)
    elif backend == 'loopback':
        return Loopback(**kwargs)
    else:
        raise ValueError(f"unknown PUSHBRIDGE_TRANSPORT backend: {backend!r}")
