from __future__ import annotations

import logging
import time
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from typing import List, Optional

from .banner import read_banner
from .models import PortResult, ResultSet, ScanConfig
from .prober import probe
from .targets import Address, resolve_address

logger = logging.getLogger(__name__)


def scan_one(
    target: str,
    port: int,
    timeout_ms: int,
    results: ResultSet,
    address: Optional[Address] = None,
) -> bool:
    """Probe one port; on connect, grab a banner and record the port. Returns True if open."""
    sock = probe(target, port, timeout_ms, address=address)
    if sock is None:
        return False
    try:
        banner = read_banner(sock, port)
    finally:
        sock.close()

    results.add(PortResult(port=port, banner=banner))
    return True


def scan(config: ScanConfig, progress_every: int = 5000) -> List[PortResult]:
    """
    Bounded-futures scanner (won't create 65k futures at once).
    Returns open ports sorted ascending once every probe has finished.
    """
    total = config.port_count
    results = ResultSet()

    address = resolve_address(config.target)
    if address is None:
        logger.debug("Could not resolve %s; nothing to scan", config.target)
        return []

    jobs = iter(config.ports)
    scanned = 0
    start_all = time.perf_counter()

    workers = min(config.workers, total)
    max_pending = max(workers * 4, 100)
    logger.debug("Scanning %s (%s): %d ports, %d workers, %d pending max",
                 config.target, address[1][0], total, workers, max_pending)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        pending = set()

        def submit_next() -> bool:
            try:
                p = next(jobs)
            except StopIteration:
                return False
            fut = pool.submit(scan_one, config.target, p, config.timeout_ms, results, address)
            pending.add(fut)
            return True

        # Prime the queue
        while len(pending) < max_pending and submit_next():
            pass

        while pending:
            done, pending = wait(pending, return_when=FIRST_COMPLETED)
            for fut in done:
                fut.result()

                scanned += 1
                if progress_every > 0 and (scanned % progress_every == 0 or scanned == total):
                    elapsed = time.perf_counter() - start_all
                    rate = scanned / elapsed if elapsed > 0 else 0.0
                    logger.debug("Scanned %d/%d | open=%d | %.0f scans/s", scanned, total, len(results), rate)

                # Refill queue
                while len(pending) < max_pending and submit_next():
                    pass

    elapsed = time.perf_counter() - start_all
    logger.info("Scanned %d ports on %s in %.2fs, %d open", total, config.target, elapsed, len(results))
    return results.sorted()
