
from . import json
from .protocol import fields


class Channel:
    """ A :class:`Channel` is a lightweight handle scoping bind, unbind, and
        trigger requests to a single channel *name*. It holds no connection
        of its own; every operation is delegated to the :class:`Client` that
        created it, and every operation returns the
        :class:`concurrent.futures.Future` for the submitted request.

        :ivar name: The channel name.
        :ivar subscribed: The Future for the subscribe request that created
            this handle, if any.
    """

    def __init__(self, client, name, subscribed=None):

        self.client = client
        self.name = name
        self.subscribed = subscribed


    def __eq__(self, other):
        if isinstance(other, Channel):
            return self.name == other.name and self.client is other.client
        return NotImplemented


    def __hash__(self):
        return hash(self.name)


    def __repr__(self):
        return 'channel.Channel: ' + repr(self.name)


    def bind(self, event_name, on_event):
        """ Invoke *on_event* with an :class:`pushbridge.protocol.Event` every
            time *event_name* arrives on this channel. The callback is
            registered locally before the bind request is submitted, so an
            event arriving right after the transport processes the request
            will not be missed.
        """

        return self.client._bind(self.name, event_name, on_event)


    def unbind(self, event_name):
        """ Discontinue delivery of *event_name* on this channel.
        """

        return self.client._unbind(self.name, event_name)


    def unbind_all(self):
        """ Discontinue delivery of every event bound on this channel.
        """

        return self.client.clear_bindings(self.name)


    def members(self):
        """ Request the member list for this (presence) channel. The Future
            will contain the raw result from the transport.
        """

        return self.client.get_users(self.name)


    def trigger(self, event_name, data=None):
        """ Send a client event. The *event_name* is prefixed with 'client-'
            if it does not already start with it. The *data* is sent as-is if
            it is a string; anything else is encoded as JSON first. An empty
            JSON object is sent if no *data* is provided.

            Client events are only accepted by the backend on private and
            presence channels, and only once the subscription has succeeded;
            a violation is reported by the backend, not here.
        """

        if not event_name.startswith(fields.CLIENT_PREFIX):
            event_name = fields.CLIENT_PREFIX + event_name

        if data is None:
            data = fields.EMPTY_DATA
        elif isinstance(data, bytes):
            data = data.decode()
        elif not isinstance(data, str):
            data = json.dumps(data).decode()

        return self.client._trigger(self.name, event_name, data)


# end of class Channel


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
