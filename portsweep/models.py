from dataclasses import dataclass
from ipaddress import IPv4Address, IPv6Address
from typing import Tuple, Union

IPAddress = Union[IPv4Address, IPv6Address]


@dataclass(frozen=True)
class Target:
    ip: IPAddress
    port: int = 0  # 0 = full range


@dataclass(frozen=True)
class ProbeResult:
    port: int
    is_open: bool
    elapsed_s: float


@dataclass(frozen=True)
class ScanReport:
    ip: IPAddress
    open_ports: Tuple[int, ...]
    scanned: int
    elapsed_s: float
    cancelled: bool = False
