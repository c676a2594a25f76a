from __future__ import annotations

from typing import Optional, Tuple

# (substring, label), tried in order; vendor entries must precede "HTTP/1."
SIGNATURES: Tuple[Tuple[str, str], ...] = (
    ("SSH", "SSH"),
    ("FTP", "FTP"),
    ("SMTP", "SMTP"),
    ("POP3", "POP3"),
    ("IMAP", "IMAP"),
    ("CUPS", "CUPS (Print Server)"),
    ("Apache", "HTTP (Apache)"),
    ("openresty", "HTTP (OpenResty/nginx)"),
    ("nginx", "HTTP (nginx)"),
    ("Microsoft-IIS", "HTTP (IIS)"),
    ("HTTP/1.", "HTTP"),
    ("RFB", "VNC"),
    ("MySQL", "MySQL"),
    ("PostgreSQL", "PostgreSQL"),
    ("redis", "Redis"),
    ("Telnet", "Telnet"),
)

PORT_HINTS: Tuple[Tuple[int, str], ...] = (
    (21, "FTP"),
    (22, "SSH"),
    (23, "Telnet"),
    (25, "SMTP"),
    (53, "DNS"),
    (80, "HTTP"),
    (110, "POP3"),
    (143, "IMAP"),
    (443, "HTTPS"),
    (445, "SMB"),
    (3306, "MySQL"),
    (5432, "PostgreSQL"),
    (6379, "Redis"),
    (5900, "VNC"),
    (631, "CUPS (Print Server)"),
    (8080, "HTTP (alt)"),
)

UNKNOWN = "Unknown"


def match_signature(banner: str) -> Optional[str]:
    lowered = banner.lower()
    for pattern, label in SIGNATURES:
        if pattern.lower() in lowered:
            return label
    return None


def port_hint(port: int) -> Optional[str]:
    for hint_port, label in PORT_HINTS:
        if hint_port == port:
            return label
    return None


def classify(port: int, banner: Optional[str]) -> str:
    """
    Service label for an open port.
    Banner signatures win; otherwise the conventional service for the port
    number is reported as a guess; otherwise "Unknown".
    """
    if banner:
        label = match_signature(banner)
        if label:
            return label

    hint = port_hint(port)
    if hint:
        return f"{hint} (port-based guess)"

    return UNKNOWN
