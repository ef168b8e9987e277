"""Show the mirror config of a repository."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click

from ..context import ResolutionContext
from ..exceptions import ConfigError, UserError
from ..fetcher import config_url, fetch_mirror_table

if TYPE_CHECKING:
    from ..cli_types import ShowConfigArgs

logger = logging.getLogger("mirrorpick")


def cmd_show_config(args: ShowConfigArgs) -> None:
    """Fetch the mirror table and print its entries in declaration order."""
    context = ResolutionContext(
        default_url=args.url,
        key_file=Path(args.key_file) if args.key_file else None,
    )
    try:
        if not context.endpoint.is_supported:
            raise UserError(f"Mirror config not supported for scheme: {context.endpoint.scheme}")
        table = fetch_mirror_table(context, timeout_s=args.fetch_timeout, log=logger)
    except ConfigError as e:
        raise UserError(str(e)) from e

    if table is None:
        raise UserError(f"No mirror config found at {config_url(args.url)}")

    if args.json:
        entries = [{"prefix": p, "url": u} for p, u in table.items()]
        click.echo(json.dumps(entries, indent=2))
        return
    if not table:
        click.echo("(empty mirror config)")
        return
    width = max(len(p) for p in table)
    for prefix, url in table.items():
        click.echo(f"{prefix:<{width}}  {url}")
