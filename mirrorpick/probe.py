"""Local egress address detection."""

from __future__ import annotations

import logging
import socket
import time

from .constants import PROBE_CONNECT_TIMEOUT_S
from .endpoint import RepositoryEndpoint
from .exceptions import ConnectivityError

logger = logging.getLogger("mirrorpick")


def determine_local_address(
    target: RepositoryEndpoint,
    *,
    timeout_s: float = PROBE_CONNECT_TIMEOUT_S,
    log: logging.Logger | None = None,
) -> str:
    """Return the local IPv4 address used to reach ``target``.

    Opens a real TCP connection and reads the bound local address, so the
    answer reflects routing (multi-homed hosts, VPNs) rather than whatever
    interface happens to be listed first.
    """
    log = log or logger
    port = target.probe_port
    log.debug(
        "Determining local IP address by connecting to %s:%d (timeout %.1fs)",
        target.host,
        port,
        timeout_s,
    )

    start_time = time.time()
    try:
        addrinfo = socket.getaddrinfo(target.host, port, socket.AF_INET, socket.SOCK_STREAM)
    except OSError as e:
        raise ConnectivityError(f"Cannot resolve {target.host}:{port}: {e}") from e
    if not addrinfo:
        raise ConnectivityError(f"Cannot resolve {target.host}:{port}: no IPv4 address")

    family, socktype, proto, _, sockaddr = addrinfo[0]
    try:
        with socket.socket(family, socktype, proto) as sock:
            sock.settimeout(timeout_s)
            sock.connect(sockaddr)
            local_ip = sock.getsockname()[0]
    except TimeoutError as e:
        raise ConnectivityError(
            f"Timed out after {timeout_s:.1f}s connecting to {target.host}:{port}"
        ) from e
    except OSError as e:
        raise ConnectivityError(f"Cannot connect to {target.host}:{port}: {e}") from e

    log.debug("Probe connected in %.2fs", time.time() - start_time)
    log.info("Local IP address is %s", local_ip)
    return local_ip
