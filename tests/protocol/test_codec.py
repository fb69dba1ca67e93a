import pytest

import pushbridge
from pushbridge.protocol import codec
from pushbridge.protocol.message import (
    ConnectionError,
    ConnectionStateChange,
    Event,
    InboundEnvelope,
)


def test_encode_init_defaults():

    encoded = codec.encode_init('APPKEY', pushbridge.Options())
    assert isinstance(encoded, bytes)

    decoded = pushbridge.json.loads(encoded)
    assert decoded['appKey'] == 'APPKEY'
    assert decoded['isLoggingEnabled'] == False

    # Unset options are left out entirely, defaults are not.

    options = decoded['options']
    assert options == {'port': 443, 'encrypted': True, 'activityTimeout': 30000}


def test_encode_init_auth():

    auth = pushbridge.Auth('https://example.com/auth')
    options = pushbridge.Options(auth=auth, cluster='eu', activity_timeout=120000)

    encoded = codec.encode_init('APPKEY', options, logging_enabled=True)
    decoded = pushbridge.json.loads(encoded)

    assert decoded['isLoggingEnabled'] == True

    options = decoded['options']
    assert options['cluster'] == 'eu'
    assert options['activityTimeout'] == 120000
    assert 'host' not in options

    auth = options['auth']
    assert auth['endpoint'] == 'https://example.com/auth'
    assert auth['headers'] == {'Content-Type': 'application/x-www-form-urlencoded'}


def test_encode_bind():

    decoded = pushbridge.json.loads(codec.encode_bind('my-channel', 'my-event'))
    assert decoded == {'channelName': 'my-channel', 'eventName': 'my-event', 'data': None}

    decoded = pushbridge.json.loads(codec.encode_bind('my-channel', 'client-x', '{}'))
    assert decoded['data'] == '{}'


def test_decode_event():

    raw = b'{"event": {"channel": "my-channel", "event": "my-event", "data": "{\\"x\\":1}"}}'
    notification = codec.decode_inbound(raw)

    assert isinstance(notification, Event)
    assert notification.channel == 'my-channel'
    assert notification.event == 'my-event'
    assert notification.data == '{"x":1}'
    assert notification.decode() == {'x': 1}


def test_decode_connection_state_change():

    raw = '{"connectionStateChange": {"previousState": "connecting", "currentState": "connected"}}'
    notification = codec.decode_inbound(raw)

    assert notification == ConnectionStateChange(previous_state='connecting', current_state='connected')


def test_decode_connection_error():

    raw = b'{"connectionError": {"message": "denied", "code": "4009"}}'
    notification = codec.decode_inbound(raw)

    assert isinstance(notification, ConnectionError)
    assert notification.message == 'denied'
    assert notification.code == '4009'
    assert notification.exception is None


def test_decode_empty_envelope():

    assert codec.decode_inbound(b'{}') is None
    assert codec.decode_inbound(b'{"somethingElse": 1}') is None


def test_decode_precedence():

    raw = pushbridge.json.dumps({
        'connectionError': {'message': 'late'},
        'connectionStateChange': {'previousState': 'connected', 'currentState': 'disconnected'},
        'event': {'channel': 'c', 'event': 'e', 'data': 'd'},
    })

    envelope = codec.decode_envelope(raw)
    assert envelope.is_event
    assert envelope.is_connection_state_change
    assert envelope.is_connection_error
    assert isinstance(envelope.notification, Event)

    raw = pushbridge.json.dumps({
        'connectionError': {'message': 'late'},
        'connectionStateChange': {'previousState': 'connected', 'currentState': 'disconnected'},
    })

    assert isinstance(codec.decode_inbound(raw), ConnectionStateChange)


@pytest.mark.parametrize('raw', (
    b'',
    b'not json',
    b'[]',
    b'null',
    b'{"event": {"channel": "c"}}',
    b'{"event": {"channel": 1, "event": "e"}}',
    b'{"connectionStateChange": {"currentState": "connected"}}',
    b'{"connectionError": "bad"}',
    b'{"event": {"channel": "\xff", "event": "e"}}',
))
def test_decode_malformed(raw):

    with pytest.raises(codec.ParseError):
        codec.decode_inbound(raw)


def test_decode_none():

    with pytest.raises(pushbridge.ParseError):
        codec.decode_inbound(None)


def test_encode_inbound():

    event = Event(channel='c', event='e', data='d')
    assert codec.decode_inbound(codec.encode_inbound(event)) == event

    assert codec.decode_inbound(codec.encode_inbound(None)) is None

    with pytest.raises(TypeError):
        codec.encode_inbound('not a notification')


def test_envelope_is_immutable():

    envelope = InboundEnvelope()

    with pytest.raises(AttributeError):
        envelope.event = Event(channel='c', event='e')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
