from __future__ import annotations

import argparse
import logging

from .models import DEFAULT_TIMEOUT_MS, DEFAULT_WORKERS, ConfigurationError, ScanConfig
from .output import format_header, print_results
from .scanner import scan


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="portprobe",
        description="A fast TCP port scanner with banner grabbing and service fingerprinting",
    )
    p.add_argument("-t", "--target", default="127.0.0.1", help="IP or hostname (default: 127.0.0.1)")
    p.add_argument("-s", "--start", type=int, default=1, help="First port to scan (default: 1)")
    p.add_argument("-e", "--end", type=int, default=1024, help="Last port to scan (default: 1024)")
    p.add_argument(
        "-m", "--timeout", type=int, default=DEFAULT_TIMEOUT_MS,
        help=f"Connect timeout in milliseconds (default: {DEFAULT_TIMEOUT_MS})",
    )
    p.add_argument(
        "-w", "--workers", type=int, default=DEFAULT_WORKERS,
        help=f"Max probes in flight (default: {DEFAULT_WORKERS})",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = ScanConfig(
            target=args.target,
            start_port=args.start,
            end_port=args.end,
            timeout_ms=args.timeout,
            workers=args.workers,
        )
    except ConfigurationError as e:
        parser.exit(1, f"Error: {e}\n")

    setup_logging(args.verbose)

    print(format_header(config))
    print()
    results = scan(config)

    print_results(results)
    return 0
