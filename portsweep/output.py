from __future__ import annotations

import json
from typing import List

from .models import ScanReport


def format_txt(report: ScanReport) -> List[str]:
    lines = [
        f"ip: {report.ip}",
        f"open tcp ports: {list(report.open_ports)}",
    ]
    for port in report.open_ports:
        lines.append(f"Port {port}: open")
    if report.cancelled:
        lines.append(f"Scan cancelled after {report.scanned} probes; results are partial")
    return lines


def format_json(report: ScanReport) -> str:
    payload = {
        "ip": str(report.ip),
        "open_ports": list(report.open_ports),
        "scanned": report.scanned,
        "elapsed_s": report.elapsed_s,
        "cancelled": report.cancelled,
    }
    return json.dumps(payload, indent=2)


def print_report(report: ScanReport, fmt: str = "txt") -> None:
    if fmt == "txt":
        for line in format_txt(report):
            print(line)
    elif fmt == "json":
        print(format_json(report))
    else:
        raise ValueError(f"Unsupported format: {fmt}")
