import pytest

import pushbridge
from pushbridge import config


def test_defaults():

    options = pushbridge.Options()
    assert options.auth is None
    assert options.cluster is None
    assert options.host is None
    assert options.port == 443
    assert options.encrypted == True
    assert options.activity_timeout == 30000

    auth = pushbridge.Auth('https://example.com/auth')
    assert auth.headers == {'Content-Type': 'application/x-www-form-urlencoded'}

    # Each instance gets its own copy of the default headers.

    assert auth.headers is not pushbridge.Auth().headers


def test_immutable():

    options = pushbridge.Options()

    with pytest.raises(AttributeError):
        options.port = 80


def test_from_dict():

    options = config.from_dict({'cluster': 'eu', 'activityTimeout': 1000})
    assert options.cluster == 'eu'
    assert options.activity_timeout == 1000
    assert options.port == 443

    options = config.from_dict({'activity_timeout': 2000, 'auth': {'endpoint': 'https://example.com/auth'}})
    assert options.activity_timeout == 2000
    assert options.auth.endpoint == 'https://example.com/auth'
    assert options.auth.headers == {'Content-Type': 'application/x-www-form-urlencoded'}

    same = pushbridge.Options()
    assert config.from_dict(same) is same


def test_from_dict_invalid():

    with pytest.raises(ValueError):
        config.from_dict({'port': 'not a port'})


def test_to_dict():

    options = pushbridge.Options(host='localhost', port=None)
    wire = config.to_dict(options)

    assert wire == {'host': 'localhost', 'encrypted': True, 'activityTimeout': 30000}


def test_load(tmp_path):

    path = tmp_path / 'options.json'
    path.write_text('{"cluster": "ap1", "encrypted": false, "auth": {"endpoint": "/auth", "headers": {"X-Token": "t"}}}')

    options = config.load(path)
    assert options.cluster == 'ap1'
    assert options.encrypted == False
    assert options.auth.headers == {'X-Token': 't'}


def test_load_invalid(tmp_path):

    path = tmp_path / 'options.json'

    path.write_text('[1, 2, 3]')
    with pytest.raises(ValueError):
        config.load(path)

    path.write_text('{not json')
    with pytest.raises(ValueError):
        config.load(path)


def test_environment(monkeypatch):

    monkeypatch.delenv('PUSHBRIDGE_TRANSPORT', raising=False)
    assert config.transport_backend() == 'zmq'

    monkeypatch.setenv('PUSHBRIDGE_REQUEST', 'tcp://bridge:1')
    monkeypatch.setenv('PUSHBRIDGE_NOTIFY', 'tcp://bridge:2')
    assert config.request_address() == 'tcp://bridge:1'
    assert config.notify_address() == 'tcp://bridge:2'


def test_connection_state_values():

    values = [state.value for state in pushbridge.ConnectionState]
    assert values == [
        'connecting',
        'connected',
        'disconnecting',
        'disconnected',
        'reconnecting',
        'reconnectingWhenNetworkBecomesReachable',
    ]


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
