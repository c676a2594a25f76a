from __future__ import annotations

import socket
from typing import Optional, Tuple

Address = Tuple[int, tuple]


def resolve_address(host: str) -> Optional[Address]:
    """
    Resolves a scan target into (address_family, sockaddr) once per scan.
    Accepts:
      - IPv4 literal: "172.20.0.10"
      - IPv6 literal: "::1" (optionally bracketed: "[::1]")
      - Hostname: "webapp" (first address returned by the resolver)
    Returns None when the name cannot be resolved.
    """
    host = host.strip()
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    if not host:
        return None

    try:
        infos = socket.getaddrinfo(host, 0, type=socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError):
        return None

    for family, _, _, _, sockaddr in infos:
        if family in (socket.AF_INET, socket.AF_INET6):
            return family, sockaddr
    return None


def with_port(sockaddr: tuple, port: int) -> tuple:
    # IPv6 sockaddrs carry flowinfo and scope_id after the port
    return (sockaddr[0], port) + tuple(sockaddr[2:])
