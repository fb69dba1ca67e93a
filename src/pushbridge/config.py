""" Connection configuration. An :class:`Options` instance is handed to
    :func:`pushbridge.client.Client.init` once and not modified afterwards;
    the transport receives it verbatim as part of the init request.
"""

import os
from typing import Dict, Optional

import msgspec

from . import json


default_headers = {'Content-Type': 'application/x-www-form-urlencoded'}


def _default_headers():
    return dict(default_headers)


class Auth(msgspec.Struct, frozen=True):
    """ Where and how the transport should authenticate private and presence
        channel subscriptions. The HTTP call itself is the transport's
        business.
    """

    endpoint: Optional[str] = None
    headers: Optional[Dict[str, str]] = msgspec.field(default_factory=_default_headers)


class Options(msgspec.Struct, frozen=True, rename='camel'):
    """ Options for the connection to the messaging backend. The
        *activity_timeout* is in milliseconds, and is passed through to the
        transport without being interpreted here.
    """

    auth: Optional[Auth] = None
    cluster: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = 443
    encrypted: Optional[bool] = True
    activity_timeout: Optional[int] = 30000


# Python spellings accepted by from_dict() in addition to the wire spelling.

_aliases = {'activity_timeout': 'activityTimeout'}


def from_dict(mapping):
    """ Construct an :class:`Options` instance from a dictionary, as one
        might find in a JSON configuration file. Both the wire spelling
        (activityTimeout) and the Python spelling (activity_timeout) of
        field names are accepted. Unrecognized fields are ignored.
    """

    if isinstance(mapping, Options):
        return mapping

    translated = dict()
    for key, value in mapping.items():
        key = _aliases.get(key, key)
        translated[key] = value

    try:
        return msgspec.convert(translated, Options)
    except msgspec.ValidationError as e:
        raise ValueError('invalid options: ' + str(e)) from e


def to_dict(options):
    """ Return the wire representation of *options* as a dictionary. Fields
        set to None are omitted from the top level; the nested auth block is
        represented in full.
    """

    builtins = msgspec.to_builtins(options)

    wire = dict()
    for key, value in builtins.items():
        if value is None:
            continue
        wire[key] = value

    return wire


def load(path):
    """ Read a JSON file containing a single object and return the
        :class:`Options` it describes.
    """

    with open(path, 'rb') as contents:
        raw = contents.read()

    try:
        mapping = json.loads(raw)
    except json.DecodeError as e:
        raise ValueError('cannot parse options file %s: %s' % (path, e)) from e

    if not isinstance(mapping, dict):
        raise ValueError('options file must contain a JSON object: ' + str(path))

    return from_dict(mapping)


# Transport selection and bridge endpoints, see pushbridge.transport.

def transport_backend():
    return os.environ.get('PUSHBRIDGE_TRANSPORT', 'zmq')


def request_address():
    return os.environ.get('PUSHBRIDGE_REQUEST', 'tcp://127.0.0.1:10139')


def notify_address():
    return os.environ.get('PUSHBRIDGE_NOTIFY', 'tcp://127.0.0.1:10140')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
