from __future__ import annotations

import socket
from typing import Optional

READ_TIMEOUT_S = 1.0
BANNER_BYTES = 1024

HTTP_HEAD_PROBE = b"HEAD / HTTP/1.0\r\n\r\n"
CUPS_GET_PROBE = b"GET / HTTP/1.0\r\nHost: localhost\r\n\r\n"

_PROBES = {
    80: HTTP_HEAD_PROBE,
    443: HTTP_HEAD_PROBE,
    8080: HTTP_HEAD_PROBE,
    631: CUPS_GET_PROBE,
}


def probe_payload(port: int) -> bytes:
    """Bytes to send right after connecting; empty for services that greet first."""
    return _PROBES.get(port, b"")


def select_banner_line(text: str) -> Optional[str]:
    """
    Pick one representative line from a response:
    the first "Server:" header if there is one, else the first line.
    Only newline separates lines; a lone carriage return or form feed stays in the line.
    """
    lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    if not lines:
        return None

    chosen = lines[0]
    for line in lines:
        if line.lower().startswith("server:"):
            chosen = line
            break

    chosen = chosen.strip()
    return chosen or None


def read_banner(sock: socket.socket, port: int) -> Optional[str]:
    """
    Called only after connect() succeeds.
    Best effort: None means no banner, not that the port is closed.
    """
    sock.settimeout(READ_TIMEOUT_S)

    payload = probe_payload(port)
    if payload:
        try:
            sock.sendall(payload)
        except OSError:
            return None

    try:
        data = sock.recv(BANNER_BYTES)
    except OSError:
        return None
    if not data:
        return None

    return select_banner_line(data.decode("utf-8", errors="replace"))
