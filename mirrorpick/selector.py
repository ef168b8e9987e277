"""Mirror selection by local address prefix."""

from __future__ import annotations

import logging
from collections.abc import Mapping

logger = logging.getLogger("mirrorpick")


def find_matching_prefix(
    local_ip: str,
    table: Mapping[str, str],
    *,
    log: logging.Logger | None = None,
) -> str | None:
    """Return the first prefix (in declaration order) that starts local_ip.

    Matching is a literal string prefix test on the dotted address, so
    "192.16" also matches "192.168.1.1". The first hit wins even if a later
    prefix is longer.
    """
    log = log or logger
    for prefix, url in table.items():
        if local_ip.startswith(prefix):
            log.info("Local IP %s starts with '%s', selecting [%s]", local_ip, prefix, url)
            return prefix
        log.debug("Local IP %s does not start with '%s' --> %s", local_ip, prefix, url)
    return None


def select_mirror(
    local_ip: str,
    table: Mapping[str, str],
    *,
    log: logging.Logger | None = None,
) -> str | None:
    """Return the repository URL selected for local_ip, or None."""
    prefix = find_matching_prefix(local_ip, table, log=log)
    if prefix is None:
        return None
    return table[prefix]
