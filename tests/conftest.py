import socket

import pytest


def _bound_socket(listen: bool, family: int = socket.AF_INET, host: str = "127.0.0.1") -> socket.socket:
    s = socket.socket(family, socket.SOCK_STREAM)
    s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    s.bind((host, 0))
    if listen:
        s.listen(50)
    return s


def _has_ipv6_loopback() -> bool:
    if not socket.has_ipv6:
        return False
    try:
        with socket.socket(socket.AF_INET6, socket.SOCK_STREAM) as s:
            s.bind(("::1", 0))
    except OSError:
        return False
    return True


@pytest.fixture
def listeners():
    """Three listening loopback sockets; yields their ports."""
    socks = [_bound_socket(listen=True) for _ in range(3)]
    try:
        yield sorted(s.getsockname()[1] for s in socks)
    finally:
        for s in socks:
            s.close()


@pytest.fixture
def closed_ports():
    """Loopback ports that are reserved but not listening, so connects are refused."""
    socks = [_bound_socket(listen=False) for _ in range(5)]
    try:
        yield [s.getsockname()[1] for s in socks]
    finally:
        for s in socks:
            s.close()


@pytest.fixture
def ipv6_ports():
    """(listening, refusing) port pair on ::1."""
    if not _has_ipv6_loopback():
        pytest.skip("no IPv6 loopback on this host")
    open_sock = _bound_socket(listen=True, family=socket.AF_INET6, host="::1")
    idle_sock = _bound_socket(listen=False, family=socket.AF_INET6, host="::1")
    try:
        yield open_sock.getsockname()[1], idle_sock.getsockname()[1]
    finally:
        open_sock.close()
        idle_sock.close()
