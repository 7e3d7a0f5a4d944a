"""Server address settings taken from the process environment."""

from __future__ import annotations

import os
import re
from typing import Mapping, Optional

IP_ADDRESS_VARIABLE = "NEURALA_SERVER_IP_ADDRESS"
PORT_VARIABLE = "NEURALA_SERVER_PORT"

DEFAULT_IP_ADDRESS = "127.0.0.1"
DEFAULT_PORT = 51234

_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")


def _parse_port(text: str) -> int:
    """Read the leading integer of ``text`` as a 16-bit unsigned port.

    Text without a leading integer gives 0; values outside the 16-bit
    range wrap around.
    """
    match = _LEADING_INTEGER.match(text)
    value = int(match.group(1)) if match else 0
    return value % 65536


def server_address(environ: Optional[Mapping[str, str]] = None) -> tuple[str, int]:
    """Return the ``(host, port)`` of the frame server.

    ``NEURALA_SERVER_IP_ADDRESS`` and ``NEURALA_SERVER_PORT`` override the
    defaults of 127.0.0.1 and 51234.
    """
    if environ is None:
        environ = os.environ
    host = environ.get(IP_ADDRESS_VARIABLE)
    port_text = environ.get(PORT_VARIABLE)
    return (
        DEFAULT_IP_ADDRESS if host is None else host,
        DEFAULT_PORT if port_text is None else _parse_port(port_text),
    )