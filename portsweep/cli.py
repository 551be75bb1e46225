from __future__ import annotations

import argparse
import logging
import math
import sys
from typing import Optional

from .errors import ResolveError
from .models import Target
from .output import print_report
from .ports import port_range, resolve_port
from .scanner import DEFAULT_PROGRESS_EVERY, DEFAULT_TIMEOUT_S, DEFAULT_WORKERS, scan
from .targets import resolve_host


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="portsweep", description="Concurrent TCP connect scanner")
    # host is checked by hand so a missing host exits 1, not argparse's 2
    p.add_argument("host", nargs="?", help="IP address or hostname")
    p.add_argument("port", nargs="?", help="Single port to probe (default: scan 0-65535)")
    p.add_argument("--threads", type=int, default=DEFAULT_WORKERS,
                   help=f"Concurrent probes (default: {DEFAULT_WORKERS})")
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_S,
                   help=f"Connect timeout seconds (default: {DEFAULT_TIMEOUT_S})")
    p.add_argument("--progress-every", type=int, default=DEFAULT_PROGRESS_EVERY,
                   help=f"Progress log interval, 0 to disable (default: {DEFAULT_PROGRESS_EVERY})")
    p.add_argument("--format", choices=["txt", "json"], default="txt", help="Report format")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def resolve_target(host: str, port_text: Optional[str] = None) -> Target:
    # Port first, then host: nothing touches DNS if the port is bad
    port = resolve_port(port_text) if port_text is not None else 0
    return Target(ip=resolve_host(host), port=port)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.host:
        print("Must supply a host.")
        return 1
    if args.threads < 1:
        print("Error: --threads must be >= 1")
        return 1
    if not math.isfinite(args.timeout) or args.timeout <= 0:
        print("Error: --timeout must be a finite number > 0")
        return 1

    setup_logging(args.verbose)

    try:
        target = resolve_target(args.host, args.port)
    except ResolveError as err:
        print(f"Error: {err}")
        return 1

    logging.info("Target %s resolved to %s", args.host, target.ip)

    report = scan(
        target.ip,
        port_range(target.port),
        workers=args.threads,
        timeout_s=args.timeout,
        progress_every=args.progress_every,
    )

    print_report(report, fmt=args.format)
    return 0


def run() -> None:
    sys.exit(main())
