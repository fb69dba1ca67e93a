""" Minimal chat participant. With PUSHBRIDGE_TRANSPORT=loopback nothing
    leaves the process, and the messages sent are echoed locally; otherwise
    a bridge process must be listening at PUSHBRIDGE_REQUEST and
    PUSHBRIDGE_NOTIFY.
"""

import logging
import sys

import pushbridge


def on_state_change(change):
    print('connection: %s -> %s' % (change.previous_state, change.current_state))


def on_error(error):
    print('connection error: %s (%s)' % (error.message, error.code))


def on_message(event):
    print('%s: %s' % (event.channel, event.decode()))


def main():

    logging.basicConfig(level=logging.INFO)

    options = pushbridge.Options(
        cluster='eu',
        auth=pushbridge.Auth('https://example.com/pusher/auth'))

    client = pushbridge.Client()
    client.init(sys.argv[1] if len(sys.argv) > 1 else 'APPKEY', options)
    client.connect(on_state_change, on_error)

    channel = client.subscribe('private-chat')
    channel.bind('client-message', on_message)

    for line in sys.stdin:
        line = line.strip()
        if line == '':
            continue

        channel.trigger('message', {'text': line})

        if isinstance(client.transport, pushbridge.transport.Loopback):
            echoed = pushbridge.Event(channel.name, 'client-message', pushbridge.json.dumps({'text': line}).decode())
            client.transport.notify(echoed)

    channel.unbind_all()
    client.unsubscribe(channel.name)
    client.disconnect()
    client.close()


if __name__ == '__main__':
    main()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
