from __future__ import annotations

import ipaddress
import logging
import math
import socket
import threading
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Dict, Iterable, Optional, Set, Union

from .models import IPAddress, ProbeResult, ScanReport

DEFAULT_WORKERS = 500
DEFAULT_TIMEOUT_S = 1.8
DEFAULT_PROGRESS_EVERY = 5000

log = logging.getLogger(__name__)


def probe(ip: IPAddress, port: int, timeout_s: float) -> ProbeResult:
    """
    One TCP connect attempt. Refused, timed out and unreachable all
    come back as closed; nothing is raised for a failed connect.
    """
    family = socket.AF_INET6 if ip.version == 6 else socket.AF_INET
    start = time.perf_counter()
    try:
        with socket.socket(family, socket.SOCK_STREAM) as sock:
            sock.settimeout(timeout_s)
            sock.connect((str(ip), port))
        is_open = True
    except OSError:
        # socket.timeout and ConnectionRefusedError are both OSError
        is_open = False
    elapsed = time.perf_counter() - start
    return ProbeResult(port=port, is_open=is_open, elapsed_s=round(elapsed, 4))


def scan(
    ip: Union[IPAddress, str],
    ports: Iterable[int],
    workers: int = DEFAULT_WORKERS,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
    cancel: Optional[threading.Event] = None,
) -> ScanReport:
    """
    Bounded-futures scanner: ports are pulled lazily from `ports`, at most
    max(workers * 4, 100) probes are queued at a time and at most `workers`
    sockets are open at once.

    Only this thread touches the open-port set; workers hand results back
    through their futures. Returns once every dispatched probe has finished.
    Setting `cancel` stops dispatching, drops queued probes and waits for the
    in-flight ones.
    """
    if workers < 1:
        raise ValueError("workers must be >= 1")
    if not math.isfinite(timeout_s) or timeout_s <= 0:
        raise ValueError("timeout_s must be a finite number > 0")

    ip = ipaddress.ip_address(ip)
    if cancel is None:
        cancel = threading.Event()

    total = len(ports) if hasattr(ports, "__len__") else None
    jobs = iter(ports)
    open_ports: Set[int] = set()
    scanned = 0
    winding_down = False
    start_all = time.perf_counter()

    max_pending = max(workers * 4, 100)

    log.info(
        "Scanning %s: %s ports, %d workers, timeout %.2fs",
        ip, total if total is not None else "?", workers, timeout_s,
    )

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="probe") as pool:
        pending: Dict[Future, int] = {}

        def submit_next() -> bool:
            if cancel.is_set():
                return False
            try:
                port = next(jobs)
            except StopIteration:
                return False
            fut = pool.submit(probe, ip, port, timeout_s)
            pending[fut] = port
            return True

        # Prime the queue
        while len(pending) < max_pending and submit_next():
            pass

        while pending:
            if cancel.is_set() and not winding_down:
                winding_down = True
                log.info("Scan cancelled, waiting on in-flight probes")
                for fut in pending:
                    fut.cancel()

            try:
                done, _ = wait(pending, return_when=FIRST_COMPLETED)
            except KeyboardInterrupt:
                log.warning("Interrupted, finishing in-flight probes")
                cancel.set()
                continue

            for fut in done:
                port = pending.pop(fut)
                if fut.cancelled():
                    continue
                try:
                    r = fut.result()
                except Exception:
                    log.exception("Probe of %s:%d failed unexpectedly", ip, port)
                    r = ProbeResult(port=port, is_open=False, elapsed_s=0.0)

                scanned += 1
                if r.is_open:
                    open_ports.add(r.port)
                    log.debug("%s:%d open (%.4fs)", ip, r.port, r.elapsed_s)

                if progress_every > 0 and (scanned % progress_every == 0 or scanned == total):
                    elapsed = time.perf_counter() - start_all
                    rate = scanned / elapsed if elapsed > 0 else 0.0
                    log.info(
                        "Scanned %d/%s | open=%d | %.0f probes/s",
                        scanned, total if total is not None else "?", len(open_ports), rate,
                    )

            # Refill queue
            while len(pending) < max_pending and submit_next():
                pass

    elapsed_all = time.perf_counter() - start_all
    log.info("Scan of %s finished: %d probes, %d open, %.2fs", ip, scanned, len(open_ports), elapsed_all)

    return ScanReport(
        ip=ip,
        open_ports=tuple(sorted(open_ports)),
        scanned=scanned,
        elapsed_s=round(elapsed_all, 4),
        cancelled=cancel.is_set(),
    )
