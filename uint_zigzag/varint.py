# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Varint encoding/decoding (unsigned LEB128 style).

Values are written least-significant 7-bit group first. Every byte except
the last has the continuation bit (0x80) set. A 128-bit value needs at most
``MAX_BYTES`` (19) bytes.

Despite the package name no zig-zag transform is applied: only non-negative
magnitudes are encoded.
"""

from typing import BinaryIO, Optional, Tuple

CONTINUATION_BIT = 0x80
PAYLOAD_MASK = 0x7F

UINT128_BITS = 128
UINT128_MAX = (1 << UINT128_BITS) - 1


def max_bytes_for_width(width: int) -> int:
    """
    Return the longest encoding for an unsigned integer of ``width`` bits.

    Args:
        width: Integer width in bits (e.g. 8, 32, 128)

    Returns:
        ceil(width / 7)

    Raises:
        ValueError: If width is not positive
    """
    if width < 1:
        raise ValueError(f"Invalid integer width: {width}")
    return -(-width // 7)


# The maximum number of bytes a 128-bit value will consume
MAX_BYTES = max_bytes_for_width(UINT128_BITS)


class InvalidByteSequence(ValueError):
    """No terminating byte was found within the allowed length."""

    def __init__(self, message: str = "invalid byte sequence"):
        super().__init__(message)


class UnexpectedEndOfStream(OSError):
    """The byte source ended before a complete varint was read."""

    def __init__(self, message: str = "unexpected end of input"):
        super().__init__(message)


def encode_into(value: int, buffer, offset: int = 0) -> int:
    """
    Encode an unsigned integer into a caller-supplied buffer.

    The buffer must have room for the full encoding starting at ``offset``;
    a buffer that is too small raises IndexError.

    Args:
        value: Non-negative integer to encode
        buffer: Mutable byte buffer (bytearray, memoryview)
        offset: Position of the first byte to write

    Returns:
        Number of bytes written
    """
    if value < 0:
        raise ValueError("Cannot encode negative value as varint")

    i = offset
    while value >= CONTINUATION_BIT:
        buffer[i] = (value & PAYLOAD_MASK) | CONTINUATION_BIT
        value >>= 7
        i += 1
    buffer[i] = value
    return i + 1 - offset


def encoded_length(value: int) -> int:
    """Number of bytes needed to encode ``value``."""
    if value < 0:
        raise ValueError("Cannot encode negative value as varint")
    return max(1, -(-value.bit_length() // 7))


def encode(value: int) -> bytes:
    """
    Encode an unsigned integer as a varint.

    Args:
        value: Non-negative integer to encode

    Returns:
        Varint-encoded bytes (1 to MAX_BYTES long for 128-bit values)
    """
    scratch = bytearray(max(MAX_BYTES, encoded_length(value)))
    length = encode_into(value, scratch)
    return bytes(scratch[:length])


def peek(data, max_bytes: int = MAX_BYTES) -> Optional[int]:
    """
    Return how many bytes the varint at the start of ``data`` occupies.

    Only the framing is examined; the value is not decoded.

    Args:
        data: Bytes, possibly empty or truncated
        max_bytes: Longest sequence accepted

    Returns:
        Length of the complete varint, or None if ``data`` holds no
        terminating byte within the first ``max_bytes`` bytes
    """
    for i in range(min(len(data), max_bytes)):
        if data[i] < CONTINUATION_BIT:
            return i + 1
    return None


def decode_from(data, offset: int = 0, max_bytes: int = MAX_BYTES) -> Tuple[int, int]:
    """
    Decode a varint starting at ``offset``.

    Args:
        data: Bytes containing the varint
        offset: Starting offset in data
        max_bytes: Longest sequence accepted

    Returns:
        Tuple of (decoded value, offset just past the varint)

    Raises:
        InvalidByteSequence: If the varint is truncated or overlong
    """
    value = 0
    shift = 0

    for i in range(offset, offset + max_bytes):
        if i >= len(data):
            raise InvalidByteSequence()

        byte = data[i]
        value |= (byte & PAYLOAD_MASK) << shift
        if byte < CONTINUATION_BIT:
            return value, i + 1
        shift += 7

    raise InvalidByteSequence()


def decode(data, max_bytes: int = MAX_BYTES) -> int:
    """
    Decode the varint at the start of ``data``. Trailing bytes are ignored.

    Raises:
        InvalidByteSequence: If the varint is truncated or overlong
    """
    value, _ = decode_from(data, 0, max_bytes)
    return value


def write_to_stream(value: int, writer: BinaryIO) -> int:
    """
    Write the encoding of ``value`` with a single ``write`` call.

    Returns:
        Number of bytes the writer accepted, which may be less than the
        encoded length for a partial-write stream. Errors from the writer
        propagate unchanged.
    """
    scratch = bytearray(max(MAX_BYTES, encoded_length(value)))
    length = encode_into(value, scratch)
    written = writer.write(bytes(scratch[:length]))
    # Non-blocking raw streams report None when nothing was accepted
    return written or 0


def read_from_stream(reader: BinaryIO, max_bytes: int = MAX_BYTES) -> int:
    """
    Read one varint from a byte source, one byte per ``read`` call.

    Args:
        reader: Object with a ``read(size)`` method returning bytes
        max_bytes: Longest sequence accepted

    Returns:
        Decoded value

    Raises:
        UnexpectedEndOfStream: If the source returns no data before the
            terminating byte
        InvalidByteSequence: If ``max_bytes`` bytes carry no terminator
    """
    scratch = bytearray(max_bytes)
    for i in range(max_bytes):
        byte = reader.read(1)
        if not byte:
            raise UnexpectedEndOfStream()
        scratch[i] = byte[0]
        if peek(scratch[:i + 1], max_bytes) is not None:
            return decode(scratch[:i + 1], max_bytes)

    raise InvalidByteSequence()
