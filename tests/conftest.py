# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Pytest configuration for serial integration tests."""

import pytest

# pyserial loopback: everything written is read back
LOOPBACK_URL = "loop://"


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--device",
        action="store",
        default=None,
        help="Serial port with TX wired to RX (e.g., /dev/ttyUSB0); "
             "defaults to the pyserial loop:// URL",
    )
    parser.addoption(
        "--baudrate",
        action="store",
        type=int,
        default=115200,
        help="Baud rate for --device",
    )


@pytest.fixture(scope="session")
def device_port(request):
    """Serial port under test: --device or the pyserial loopback URL."""
    return request.config.getoption("--device") or LOOPBACK_URL


@pytest.fixture(scope="session")
def baudrate(request):
    """Baud rate from command line."""
    return request.config.getoption("--baudrate")


@pytest.fixture
def loopback(device_port, baudrate):
    """
    Open a transport whose writes come back as reads.

    Function-scoped so every test starts with an empty line.
    """
    from uint_zigzag.transport import Transport

    transport = Transport(device_port, baudrate, timeout=0.5)
    yield transport
    transport.close()
