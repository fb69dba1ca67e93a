import itertools
import threading

import pytest
import zmq

import pushbridge
from pushbridge.transport.zmq import bridge
from pushbridge.transport.zmq import framing


@pytest.fixture
def loopback():
    return pushbridge.transport.Loopback()


@pytest.fixture
def client(loopback):

    client = pushbridge.Client(loopback)
    client.init('APPKEY', pushbridge.Options()).result(timeout=1)

    yield client

    client.close()


class FakeBridge:
    """ Stand-in for the companion bridge process: answers requests on a
        ROUTER socket and publishes notifications on a PUB socket, both
        bound to inproc addresses in the same ZeroMQ context the transport
        uses.
    """

    def __init__(self, name):

        context = bridge.zmq_context

        self.request_address = 'inproc://%s.request' % (name)
        self.notify_address = 'inproc://%s.notify' % (name)

        self.router = context.socket(zmq.ROUTER)
        self.router.setsockopt(zmq.LINGER, 0)
        self.router.bind(self.request_address)

        self.pub = context.socket(zmq.PUB)
        self.pub.setsockopt(zmq.LINGER, 0)
        self.pub.bind(self.notify_address)

        self.received = list()
        self.users = dict()
        self.failures = set()
        self.silent = set()

        self.shutdown = False
        self.thread = threading.Thread(target=self.run)
        self.thread.daemon = True
        self.thread.start()


    def run(self):

        poller = zmq.Poller()
        poller.register(self.router, zmq.POLLIN)

        while self.shutdown == False:
            if not poller.poll(50):
                continue

            parts = self.router.recv_multipart()
            identity = parts[0]
            msg_id, operation, argument = framing.from_request_frames(parts[1:])
            self.received.append((operation, argument))

            if operation in self.silent:
                continue

            value = None
            error = None

            if operation in self.failures:
                error = 'simulated failure'
            elif operation == 'getUsers':
                value = self.users.get(argument.decode())

            reply = framing.to_reply_frames(msg_id, value, error)
            self.router.send_multipart((identity,) + reply)


    def publish(self, envelope):
        self.pub.send_multipart(framing.to_notify_frames(envelope))


    def close(self):
        self.shutdown = True
        self.thread.join(1)
        self.router.close()
        self.pub.close()


_bridge_names = itertools.count()


@pytest.fixture
def fake_bridge():

    fake = FakeBridge('fake-bridge-%d' % (next(_bridge_names)))

    yield fake

    fake.close()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
