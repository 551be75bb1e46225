from __future__ import annotations

import ipaddress
import logging
import socket

from .errors import HostResolutionError, NoAddressError
from .models import IPAddress

log = logging.getLogger(__name__)


def resolve_host(host: str) -> IPAddress:
    """
    Supports:
      - IPv4 literal: "172.20.0.10"
      - IPv6 literal: "::1"
      - Hostname: "webapp" (first address the resolver returns)
    """
    host = host.strip()
    if not host:
        raise HostResolutionError(host, "empty host")

    # Literals never touch DNS
    try:
        return ipaddress.ip_address(host)
    except ValueError:
        pass

    try:
        infos = socket.getaddrinfo(host, 0, type=socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError) as e:
        raise HostResolutionError(host, str(e)) from e

    if not infos:
        raise NoAddressError(host)

    # Resolver ordering decides which address wins; link-local keeps its %scope
    sockaddr = infos[0][4]
    ip = ipaddress.ip_address(sockaddr[0])
    log.debug("Resolved %s -> %s (%d candidates)", host, ip, len(infos))
    return ip
