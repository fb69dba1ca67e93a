"""Protocol constants.

Keep these in one place to avoid stringly-typed request handling.
"""

import enum


# Version of the bridge on-the-wire framing, a single byte.
PROTOCOL_VERSION = "a"

# Prefix required on the name of any event originated by a subscriber.
CLIENT_PREFIX = "client-"

# Payload sent with a client event when the caller supplies none.
EMPTY_DATA = "{}"

# Request operations understood by the transport.
INIT = "init"
CONNECT = "connect"
DISCONNECT = "disconnect"
SUBSCRIBE = "subscribe"
UNSUBSCRIBE = "unsubscribe"
GET_USERS = "getUsers"
BIND = "bind"
UNBIND = "unbind"
TRIGGER = "trigger"

OPERATIONS = (INIT, CONNECT, DISCONNECT, SUBSCRIBE, UNSUBSCRIBE,
              GET_USERS, BIND, UNBIND, TRIGGER)

# Reply type for bridge requests.
REP = "REP"


class ConnectionState(enum.Enum):
    """ Connection states reported by the transport. These are informational;
        no transition rules are enforced on this side of the transport.
    """

    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTING = "disconnecting"
    DISCONNECTED = "disconnected"
    RECONNECTING = "reconnecting"
    RECONNECTING_WHEN_NETWORK_BECOMES_REACHABLE = "reconnectingWhenNetworkBecomesReachable"
