"""Probe the local egress address toward a repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ..endpoint import parse_endpoint
from ..exceptions import ConfigError, ConnectivityError, UserError
from ..probe import determine_local_address

if TYPE_CHECKING:
    from ..cli_types import ProbeArgs


def cmd_probe(args: ProbeArgs) -> None:
    """Print the local address used to reach the repository."""
    try:
        endpoint = parse_endpoint(args.url)
        if not endpoint.is_supported:
            raise UserError(f"Cannot probe scheme: {endpoint.scheme}")
        local_ip = determine_local_address(endpoint, timeout_s=args.timeout)
    except (ConfigError, ConnectivityError) as e:
        raise UserError(str(e)) from e
    click.echo(local_ip)
