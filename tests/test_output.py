import ipaddress
import json

import pytest

from portsweep.models import ScanReport
from portsweep.output import format_json, format_txt, print_report

REPORT = ScanReport(
    ip=ipaddress.ip_address("10.0.0.5"),
    open_ports=(22, 443),
    scanned=65536,
    elapsed_s=12.5,
)


def test_txt_layout():
    lines = format_txt(REPORT)
    assert lines[0] == "ip: 10.0.0.5"
    assert lines[1] == "open tcp ports: [22, 443]"
    assert lines[2:] == ["Port 22: open", "Port 443: open"]


def test_txt_marks_partial_results():
    partial = ScanReport(ip=REPORT.ip, open_ports=(), scanned=10, elapsed_s=0.1, cancelled=True)
    assert "partial" in format_txt(partial)[-1]


def test_json_payload():
    payload = json.loads(format_json(REPORT))
    assert payload == {
        "ip": "10.0.0.5",
        "open_ports": [22, 443],
        "scanned": 65536,
        "elapsed_s": 12.5,
        "cancelled": False,
    }


def test_unknown_format():
    with pytest.raises(ValueError):
        print_report(REPORT, fmt="xml")
