# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
uint-zigzag - variable-length encoding for unsigned 128-bit integers.

Example usage:
    from uint_zigzag import Uint

    u = Uint(345678)
    data = u.to_bytes()            # b'\\xce\\x8c\\x15'
    assert Uint.peek(data) == 3
    assert Uint.from_bytes(data) == u

    # Over a serial port
    from uint_zigzag import Transport

    with Transport("/dev/ttyACM0") as transport:
        transport.send(u)
        echo = transport.receive()
"""

from .transport import (
    Transport,
    TransportError,
    TimeoutError,
    ProtocolError,
)
from .uint import Uint, serialize, deserialize
from .varint import (
    MAX_BYTES,
    UINT128_MAX,
    InvalidByteSequence,
    UnexpectedEndOfStream,
    max_bytes_for_width,
    encode,
    encode_into,
    encoded_length,
    peek,
    decode,
    decode_from,
    write_to_stream,
    read_from_stream,
)

__version__ = "0.2.1"

__all__ = [
    # Value type
    "Uint",
    "serialize",
    "deserialize",
    # Codec
    "MAX_BYTES",
    "UINT128_MAX",
    "InvalidByteSequence",
    "UnexpectedEndOfStream",
    "max_bytes_for_width",
    "encode",
    "encode_into",
    "encoded_length",
    "peek",
    "decode",
    "decode_from",
    "write_to_stream",
    "read_from_stream",
    # Transport
    "Transport",
    "TransportError",
    "TimeoutError",
    "ProtocolError",
]
