from __future__ import annotations

from typing import List

from .fingerprint import classify
from .models import PortResult, ScanConfig

SEPARATOR = "-" * 80


def format_header(config: ScanConfig) -> str:
    return (
        f"Scanning {config.target} ports {config.start_port} to {config.end_port} "
        f"(timeout: {config.timeout_ms}ms)..."
    )


def format_row(r: PortResult) -> str:
    service = classify(r.port, r.banner)
    banner = r.banner if r.banner is not None else "none"
    return f"{r.port:<8} {service:<25} {banner}"


def render_results(results: List[PortResult]) -> List[str]:
    if not results:
        return ["No open ports found."]

    lines = [f"{'PORT':<8} {'SERVICE':<25} BANNER", SEPARATOR]
    for r in results:
        lines.append(format_row(r))
    lines.append("")
    lines.append(f"Scan complete. {len(results)} open port(s) found.")
    return lines


def print_results(results: List[PortResult]) -> None:
    for line in render_results(results):
        print(line)
