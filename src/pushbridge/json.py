''' Wrapper module exposing the equivalent of :func:`json.loads` and
    :func:`json.dumps`, backed by msgspec. Both directions operate on bytes;
    :func:`loads` will also accept a str.
'''

import msgspec


# The msgspec 'encode' operation returns bytes. Anything passing through
# this module, whether application payloads or protocol envelopes, is
# expected to be bytes on the way out.

encoder = msgspec.json.Encoder()
decoder = msgspec.json.Decoder()

dumps = encoder.encode
loads = decoder.decode

DecodeError = msgspec.DecodeError


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
