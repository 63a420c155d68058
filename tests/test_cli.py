# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Tests for the uint_tool command-line interface."""

import pytest
import serial
from unittest.mock import patch

import uint_tool
from uint_zigzag.transport import TimeoutError
from uint_zigzag.uint import Uint


class TestEncodeCommand:
    """Tests for the encode command."""

    def test_encode(self, capsys):
        """Each value is printed with its hex encoding."""
        uint_tool.main(["encode", "345678", "0x800"])
        out = capsys.readouterr().out.splitlines()
        assert out == ["345678: ce 8c 15", "2048: 80 10"]

    def test_encode_negative(self, capsys):
        """Negative values are reinterpreted, not rejected."""
        uint_tool.main(["encode", "-1"])
        out = capsys.readouterr().out
        assert out.strip().endswith("ff " * 18 + "03")

    def test_encode_invalid(self, capsys):
        """Non-integers are rejected by argparse."""
        with pytest.raises(SystemExit) as exc_info:
            uint_tool.main(["encode", "abc"])
        assert exc_info.value.code == 2


class TestDecodeCommand:
    """Tests for the decode and peek commands."""

    def test_decode_consecutive(self, capsys):
        """Every value in the buffer is printed."""
        uint_tool.main(["decode", "ce 8c 15 80 10"])
        out = capsys.readouterr().out.splitlines()
        assert out == ["345678 (3 bytes)", "2048 (2 bytes)"]

    def test_decode_truncated(self, capsys):
        """A truncated buffer exits with an error."""
        with pytest.raises(SystemExit) as exc_info:
            uint_tool.main(["decode", "8080"])
        assert exc_info.value.code == 1
        assert "invalid byte sequence" in capsys.readouterr().out

    def test_decode_bad_hex(self):
        """Invalid hex is rejected by argparse."""
        with pytest.raises(SystemExit) as exc_info:
            uint_tool.main(["decode", "zz"])
        assert exc_info.value.code == 2

    def test_peek(self, capsys):
        uint_tool.main(["peek", "ce8c15ff"])
        assert capsys.readouterr().out.strip() == "3"

    def test_peek_incomplete(self, capsys):
        uint_tool.main(["peek", "ce8c"])
        assert capsys.readouterr().out.strip() == "incomplete"


class TestSerialCommands:
    """Tests for the send and receive commands."""

    @patch('uint_tool.Transport')
    def test_send(self, mock_transport_class, capsys):
        """send opens the port, sends values and closes."""
        transport = mock_transport_class.return_value
        transport.send_many.return_value = 5

        uint_tool.main(["send", "--port", "/dev/ttyACM0", "0", "128", "2048"])

        mock_transport_class.assert_called_once_with("/dev/ttyACM0", 115200, timeout=5.0)
        transport.send_many.assert_called_once_with([Uint(0), Uint(128), Uint(2048)])
        transport.close.assert_called_once()
        assert "Sent 3 value(s), 5 bytes" in capsys.readouterr().out

    @patch('uint_tool.Transport')
    def test_receive(self, mock_transport_class, capsys):
        """receive prints each value."""
        transport = mock_transport_class.return_value
        transport.receive_many.return_value = [Uint(1), Uint(345678)]

        uint_tool.main(["receive", "-p", "/dev/ttyACM0", "-n", "2", "-t", "1.5"])

        mock_transport_class.assert_called_once_with("/dev/ttyACM0", 115200, timeout=1.5)
        transport.receive_many.assert_called_once_with(2)
        assert capsys.readouterr().out.splitlines() == ["1", "345678"]

    @patch('uint_tool.Transport')
    def test_receive_timeout(self, mock_transport_class, capsys):
        """Transport errors exit with status 1 and close the port."""
        transport = mock_transport_class.return_value
        transport.receive_many.side_effect = TimeoutError("Timeout waiting for value")

        with pytest.raises(SystemExit) as exc_info:
            uint_tool.main(["receive", "--port", "/dev/ttyACM0"])

        assert exc_info.value.code == 1
        transport.close.assert_called_once()
        assert "Error: Timeout waiting for value" in capsys.readouterr().out

    @patch('uint_tool.Transport')
    def test_open_failure(self, mock_transport_class, capsys):
        """A port that cannot be opened exits with status 1."""
        mock_transport_class.side_effect = serial.SerialException("no such port")

        with pytest.raises(SystemExit) as exc_info:
            uint_tool.main(["send", "--port", "/dev/nope", "1"])

        assert exc_info.value.code == 1
        assert "Error opening /dev/nope" in capsys.readouterr().out
