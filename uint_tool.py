#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""
Command-line tool for the uint-zigzag varint encoding.

Usage:
    python uint_tool.py encode 345678 0x800
    python uint_tool.py decode "ce 8c 15 80 10"
    python uint_tool.py peek ce8c
    python uint_tool.py send --port /dev/ttyACM0 1 2 3
    python uint_tool.py receive --port /dev/ttyACM0 --count 3

Requirements:
    pip install pyserial
"""

import argparse
import logging
import sys

try:
    import serial
except ImportError:
    print("Error: pyserial not installed. Run: pip install pyserial")
    sys.exit(1)

from uint_zigzag import Transport, Uint, decode_from, peek
from uint_zigzag.transport import TransportError
from uint_zigzag.varint import InvalidByteSequence


def parse_value(text: str) -> Uint:
    """Parse a decimal or 0x/0o/0b prefixed integer. Negatives are reinterpreted."""
    try:
        return Uint(int(text, 0))
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")


def parse_hex(text: str) -> bytes:
    """Parse hex bytes, with or without spaces."""
    try:
        return bytes.fromhex(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a hex byte string: {text!r}")


def cmd_encode(values):
    """Print the encoding of each value."""
    for value in values:
        print(f"{value}: {value.to_bytes().hex(' ')}")


def cmd_decode(data: bytes):
    """Print every value in a buffer of consecutive varints."""
    offset = 0
    while offset < len(data):
        value, end = decode_from(data, offset)
        print(f"{value} ({end - offset} bytes)")
        offset = end


def cmd_peek(data: bytes):
    """Print the length of the leading varint."""
    length = peek(data)
    if length is None:
        print("incomplete")
    else:
        print(length)


def cmd_send(transport: Transport, values):
    """Send values over the serial port."""
    total = transport.send_many(values)
    print(f"Sent {len(values)} value(s), {total} bytes")


def cmd_receive(transport: Transport, count: int):
    """Receive values from the serial port."""
    for value in transport.receive_many(count):
        print(value)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Encode and decode unsigned 128-bit varints"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # encode command
    encode_parser = subparsers.add_parser("encode", help="Encode integers")
    encode_parser.add_argument("values", nargs="+", type=parse_value,
                               help="Integers to encode")

    # decode command
    decode_parser = subparsers.add_parser("decode", help="Decode hex bytes")
    decode_parser.add_argument("data", type=parse_hex, help="Hex encoded varints")

    # peek command
    peek_parser = subparsers.add_parser("peek", help="Length of the leading varint")
    peek_parser.add_argument("data", type=parse_hex, help="Hex encoded bytes")

    # send command
    send_parser = subparsers.add_parser("send", help="Send integers over a serial port")
    send_parser.add_argument("--port", "-p", required=True,
                             help="Serial port (e.g., /dev/ttyACM0)")
    send_parser.add_argument("--baudrate", "-b", type=int, default=115200,
                             help="Baud rate")
    send_parser.add_argument("values", nargs="+", type=parse_value,
                             help="Integers to send")

    # receive command
    receive_parser = subparsers.add_parser("receive", help="Receive integers from a serial port")
    receive_parser.add_argument("--port", "-p", required=True,
                                help="Serial port (e.g., /dev/ttyACM0)")
    receive_parser.add_argument("--baudrate", "-b", type=int, default=115200,
                                help="Baud rate")
    receive_parser.add_argument("--timeout", "-t", type=float, default=5.0,
                                help="Read timeout in seconds")
    receive_parser.add_argument("--count", "-n", type=int, default=1,
                                help="Number of values to receive")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )

    try:
        if args.command == "encode":
            cmd_encode(args.values)
        elif args.command == "decode":
            cmd_decode(args.data)
        elif args.command == "peek":
            cmd_peek(args.data)
    except InvalidByteSequence as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.command not in ("send", "receive"):
        return

    try:
        transport = Transport(
            args.port,
            args.baudrate,
            timeout=getattr(args, "timeout", 5.0),
        )
    except serial.SerialException as e:
        print(f"Error opening {args.port}: {e}")
        sys.exit(1)

    try:
        if args.command == "send":
            cmd_send(transport, args.values)
        elif args.command == "receive":
            cmd_receive(transport, args.count)
    except TransportError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        transport.close()


if __name__ == "__main__":
    main()
