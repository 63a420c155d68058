# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Serial transport for Uint values.

Values are written back to back on the wire; the varint continuation bit is
the only framing.
"""

import logging
import time
from typing import Iterable, List

import serial

from .uint import IntLike, Uint
from .varint import (
    InvalidByteSequence,
    UnexpectedEndOfStream,
    read_from_stream,
    write_to_stream,
)

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Base exception for transport errors."""
    pass


class TimeoutError(TransportError):
    """Timeout waiting for data."""
    pass


class ProtocolError(TransportError):
    """Malformed varint received."""
    pass


class Transport:
    """
    Serial port transport for Uint values.

    Can be used as a context manager:
        with Transport("/dev/ttyACM0") as t:
            t.send(345678)
            value = t.receive()
    """

    def __init__(
        self,
        port: str,
        baudrate: int = 115200,
        timeout: float = 5.0,
    ):
        """
        Open the serial port.

        Args:
            port: Serial port path or pyserial URL (e.g., "/dev/ttyACM0", "loop://")
            baudrate: Baud rate (default 115200)
            timeout: Read timeout in seconds (default 5.0)
        """
        self._ser = serial.serial_for_url(port, baudrate, timeout=timeout)
        logger.debug("Opened %s at %d baud (timeout %.1fs)", port, baudrate, timeout)
        time.sleep(0.1)  # Let the device settle

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self):
        """Close the serial connection."""
        if self._ser and self._ser.is_open:
            logger.debug("Closing %s", self._ser.port)
            self._ser.close()

    @property
    def port(self) -> str:
        """Return the serial port name."""
        return self._ser.port

    def send(self, value: IntLike) -> int:
        """
        Send one value.

        Short writes are retried until the whole encoding is on the wire.

        Returns:
            Number of bytes written
        """
        value = Uint(value)
        length = value.encoded_length
        written = write_to_stream(value.value, self._ser)
        if written < length:
            data = value.to_bytes()
            while written < length:
                n = self._ser.write(data[written:])
                if not n:
                    raise TransportError(f"Write stalled after {written} of {length} bytes")
                written += n
        self._ser.flush()
        logger.debug("Sent %s (%d bytes)", value, length)
        return length

    def receive(self) -> Uint:
        """
        Receive one value.

        Raises:
            TimeoutError: If the port timed out before a complete value arrived
            ProtocolError: If the received bytes are not a valid varint
        """
        try:
            value = Uint(read_from_stream(self._ser))
        except UnexpectedEndOfStream:
            raise TimeoutError("Timeout waiting for value")
        except InvalidByteSequence as e:
            raise ProtocolError(f"Invalid varint received: {e}")
        logger.debug("Received %s", value)
        return value

    def send_many(self, values: Iterable[IntLike]) -> int:
        """Send several values, returning the total bytes written."""
        return sum(self.send(value) for value in values)

    def receive_many(self, count: int) -> List[Uint]:
        """Receive ``count`` values."""
        return [self.receive() for _ in range(count)]
