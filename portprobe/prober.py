from __future__ import annotations

import socket
from typing import Optional

from .targets import Address, resolve_address, with_port

# settimeout() overflows the platform time_t well below the uint64 millisecond range
MAX_CONNECT_TIMEOUT_S = 365 * 24 * 3600.0


def connect_timeout_s(timeout_ms: int) -> float:
    return min(timeout_ms / 1000.0, MAX_CONNECT_TIMEOUT_S)


def probe(host: str, port: int, timeout_ms: int, address: Optional[Address] = None) -> Optional[socket.socket]:
    """
    TCP connect to host:port within timeout_ms.
    Pass a pre-resolved address to skip the lookup of host.
    Returns the connected socket (caller closes it) or None. Refused, timed out
    and unreachable are all reported the same way.
    """
    if address is None:
        address = resolve_address(host)
        if address is None:
            return None
    family, sockaddr = address

    sock: Optional[socket.socket] = None
    try:
        sock = socket.socket(family, socket.SOCK_STREAM)
        sock.settimeout(connect_timeout_s(timeout_ms))
        sock.connect(with_port(sockaddr, port))
        return sock
    except OSError:
        if sock:
            sock.close()
        return None
