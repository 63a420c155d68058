# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Uint value type.

A ``Uint`` is an immutable unsigned 128-bit integer that encodes itself as a
varint and otherwise behaves like an int in expressions.

Overflow policy: every arithmetic and bitwise operator wraps modulo 2**128.
Division and modulo by zero raise ZeroDivisionError.

Negative inputs are reinterpreted as their two's-complement bit pattern
(sign-extended to 128 bits), never rejected or clamped. No zig-zag sign
folding takes place, so ``Uint(-1)`` encodes to the full 19 bytes.
"""

from typing import BinaryIO, Iterable, Optional, Union

from .varint import (
    MAX_BYTES,
    UINT128_BITS,
    UINT128_MAX,
    InvalidByteSequence,
    decode,
    encode,
    encode_into,
    encoded_length,
    peek,
    read_from_stream,
    write_to_stream,
)

IntLike = Union["Uint", int]


def _operand(other) -> Optional[int]:
    """Return ``other`` as a 128-bit unsigned int, or None if unsupported."""
    if isinstance(other, Uint):
        return other._value
    if isinstance(other, int):
        return other & UINT128_MAX
    return None


def _truncate(value: int, bits: int, signed: bool) -> int:
    value &= (1 << bits) - 1
    if signed and value >> (bits - 1):
        value -= 1 << bits
    return value


class Uint:
    """
    Unsigned 128-bit integer with a variable-length byte encoding.

    Example:
        >>> Uint(345678).to_bytes()
        b'\\xce\\x8c\\x15'
        >>> Uint.from_bytes(b"\\x80\\x10")
        Uint(2048)
    """

    __slots__ = ("_value",)

    MAX_BYTES = MAX_BYTES
    BITS = UINT128_BITS
    MAX = UINT128_MAX

    def __init__(self, value: IntLike = 0):
        operand = _operand(value)
        if operand is None:
            raise TypeError(f"Cannot convert {type(value).__name__} to Uint")
        object.__setattr__(self, "_value", operand)

    def __setattr__(self, name, value):
        raise AttributeError("Uint is immutable")

    def __reduce__(self):
        return (Uint, (self._value,))

    @property
    def value(self) -> int:
        """The wrapped integer."""
        return self._value

    # Codec

    @staticmethod
    def peek(data) -> Optional[int]:
        """Number of bytes the Uint at the start of ``data`` occupies, or None."""
        return peek(data)

    @classmethod
    def from_bytes(cls, data) -> "Uint":
        """
        Decode a Uint from the start of ``data``.

        Raises:
            InvalidByteSequence: If no complete encoding is found
        """
        return cls(decode(data))

    @classmethod
    def from_reader(cls, reader: BinaryIO) -> "Uint":
        """Read a Uint from a byte stream."""
        return cls(read_from_stream(reader))

    def to_bytes(self) -> bytes:
        """Minimal encoding, 1 to MAX_BYTES long."""
        return encode(self._value)

    def to_bytes_into(self, buffer, offset: int = 0) -> int:
        """Encode into ``buffer`` and return the number of bytes used."""
        return encode_into(self._value, buffer, offset)

    def to_writer(self, writer: BinaryIO) -> int:
        """Write the encoding to a byte stream, returning the bytes accepted."""
        return write_to_stream(self._value, writer)

    @property
    def encoded_length(self) -> int:
        return encoded_length(self._value)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    # Conversions

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def to_unsigned(self, bits: int) -> int:
        """Truncating cast to an unsigned integer of ``bits`` bits."""
        return _truncate(self._value, bits, signed=False)

    def to_signed(self, bits: int) -> int:
        """Truncating cast to a two's-complement integer of ``bits`` bits."""
        return _truncate(self._value, bits, signed=True)

    def to_u8(self) -> int:
        return self.to_unsigned(8)

    def to_u16(self) -> int:
        return self.to_unsigned(16)

    def to_u32(self) -> int:
        return self.to_unsigned(32)

    def to_u64(self) -> int:
        return self.to_unsigned(64)

    def to_u128(self) -> int:
        return self._value

    def to_i8(self) -> int:
        return self.to_signed(8)

    def to_i16(self) -> int:
        return self.to_signed(16)

    def to_i32(self) -> int:
        return self.to_signed(32)

    def to_i64(self) -> int:
        return self.to_signed(64)

    def to_i128(self) -> int:
        return self.to_signed(128)

    # Display

    def __repr__(self) -> str:
        return f"Uint({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __format__(self, format_spec: str) -> str:
        return format(self._value, format_spec)

    # Comparison

    def __hash__(self) -> int:
        return hash(self._value)

    def __eq__(self, other) -> bool:
        if isinstance(other, (Uint, int)):
            return self._value == int(other)
        return NotImplemented

    def __lt__(self, other) -> bool:
        if isinstance(other, (Uint, int)):
            return self._value < int(other)
        return NotImplemented

    def __le__(self, other) -> bool:
        if isinstance(other, (Uint, int)):
            return self._value <= int(other)
        return NotImplemented

    def __gt__(self, other) -> bool:
        if isinstance(other, (Uint, int)):
            return self._value > int(other)
        return NotImplemented

    def __ge__(self, other) -> bool:
        if isinstance(other, (Uint, int)):
            return self._value >= int(other)
        return NotImplemented

    # Arithmetic

    def __add__(self, other) -> "Uint":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return Uint(self._value + rhs)

    __radd__ = __add__

    def __sub__(self, other) -> "Uint":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return Uint(self._value - rhs)

    def __rsub__(self, other) -> "Uint":
        lhs = _operand(other)
        if lhs is None:
            return NotImplemented
        return Uint(lhs - self._value)

    def __mul__(self, other) -> "Uint":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return Uint(self._value * rhs)

    __rmul__ = __mul__

    def __floordiv__(self, other) -> "Uint":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return Uint(self._value // rhs)

    def __rfloordiv__(self, other) -> "Uint":
        lhs = _operand(other)
        if lhs is None:
            return NotImplemented
        return Uint(lhs // self._value)

    def __mod__(self, other) -> "Uint":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return Uint(self._value % rhs)

    def __rmod__(self, other) -> "Uint":
        lhs = _operand(other)
        if lhs is None:
            return NotImplemented
        return Uint(lhs % self._value)

    def __divmod__(self, other):
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        quotient, remainder = divmod(self._value, rhs)
        return Uint(quotient), Uint(remainder)

    def __rdivmod__(self, other):
        lhs = _operand(other)
        if lhs is None:
            return NotImplemented
        quotient, remainder = divmod(lhs, self._value)
        return Uint(quotient), Uint(remainder)

    def __pow__(self, other, modulo=None) -> "Uint":
        exponent = _operand(other)
        if exponent is None:
            return NotImplemented
        if modulo is None:
            return Uint(pow(self._value, exponent, 1 << UINT128_BITS))
        return Uint(pow(self._value, exponent, Uint(modulo)._value))

    def __rpow__(self, other) -> "Uint":
        base = _operand(other)
        if base is None:
            return NotImplemented
        return Uint(pow(base, self._value, 1 << UINT128_BITS))

    # Bitwise

    def __and__(self, other) -> "Uint":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return Uint(self._value & rhs)

    __rand__ = __and__

    def __or__(self, other) -> "Uint":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return Uint(self._value | rhs)

    __ror__ = __or__

    def __xor__(self, other) -> "Uint":
        rhs = _operand(other)
        if rhs is None:
            return NotImplemented
        return Uint(self._value ^ rhs)

    __rxor__ = __xor__

    def __invert__(self) -> "Uint":
        return Uint(self._value ^ UINT128_MAX)

    def __lshift__(self, other) -> "Uint":
        if not isinstance(other, (Uint, int)):
            return NotImplemented
        count = int(other)
        if count < 0:
            raise ValueError("negative shift count")
        if count >= UINT128_BITS:
            return Uint(0)
        return Uint(self._value << count)

    def __rlshift__(self, other) -> "Uint":
        lhs = _operand(other)
        if lhs is None:
            return NotImplemented
        return Uint(lhs) << self

    def __rshift__(self, other) -> "Uint":
        if not isinstance(other, (Uint, int)):
            return NotImplemented
        count = int(other)
        if count < 0:
            raise ValueError("negative shift count")
        return Uint(self._value >> count)

    def __rrshift__(self, other) -> "Uint":
        lhs = _operand(other)
        if lhs is None:
            return NotImplemented
        return Uint(lhs) >> self

    # Reductions

    @classmethod
    def sum(cls, values: Iterable[IntLike]) -> "Uint":
        """Wrapping sum of Uints or ints."""
        total = cls(0)
        for value in values:
            total += value
        return total

    @classmethod
    def product(cls, values: Iterable[IntLike]) -> "Uint":
        """Wrapping product of Uints or ints. The empty product is 1."""
        total = cls(1)
        for value in values:
            total *= value
        return total


def serialize(value: IntLike) -> bytes:
    """Serialization hook: encode a Uint (or int) to its exact-length bytes."""
    return Uint(value).to_bytes()


def deserialize(data) -> Uint:
    """
    Serialization hook: decode bytes produced by ``serialize``.

    Raises:
        ValueError: If ``data`` does not start with a complete encoding
    """
    try:
        return Uint.from_bytes(data)
    except InvalidByteSequence as e:
        raise ValueError(
            f"invalid length {len(data)}, expected a byte sequence"
        ) from e
