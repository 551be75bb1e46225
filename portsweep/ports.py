from __future__ import annotations

import re

from .errors import InvalidPortFormatError, PortOutOfRangeError

MIN_PORT = 0
MAX_PORT = 65535

_INTEGER = re.compile(r"[+-]?[0-9]+")


def resolve_port(text: str) -> int:
    """
    Parses a single base-10 port number.
    Non-integers (surrounding whitespace included) raise
    InvalidPortFormatError; any integer outside
    0-65535 (negatives included) raises PortOutOfRangeError.
    """
    if not _INTEGER.fullmatch(text):
        raise InvalidPortFormatError(text)

    port = int(text)
    if port < MIN_PORT or port > MAX_PORT:
        raise PortOutOfRangeError(port)
    return port


def port_range(port: int = 0) -> range:
    """Port 0 selects the whole 0-65535 space, anything else just itself."""
    if port < MIN_PORT or port > MAX_PORT:
        raise PortOutOfRangeError(port)
    if port == 0:
        return range(MIN_PORT, MAX_PORT + 1)
    return range(port, port + 1)
