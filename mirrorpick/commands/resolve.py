"""Resolve command."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click

from ..audit import append_jsonl, resolution_record
from ..resolver import RepositoryResolver
from ..utils import default_audit_log_path, infer_actor

if TYPE_CHECKING:
    from ..cli_types import ResolveArgs

logger = logging.getLogger("mirrorpick")


def cmd_resolve(args: ResolveArgs) -> None:
    """Resolve the repository URL for this machine and print it."""
    resolver = RepositoryResolver(
        args.url,
        key_file=args.key_file,
        logger=logger,
        probe_timeout_s=args.probe_timeout,
        fetch_timeout_s=args.fetch_timeout,
    )
    resolution = resolver.resolve_detailed()
    record = resolution_record(resolution, actor=infer_actor())

    if not args.no_audit:
        audit_log = Path(args.audit_log) if args.audit_log else default_audit_log_path()
        try:
            append_jsonl(audit_log, record)
        except OSError as e:
            # Audit failures never change the printed URL.
            logger.warning("Could not write audit log %s: %s", audit_log, e)

    if args.json:
        click.echo(json.dumps(record, indent=2, sort_keys=True))
    else:
        click.echo(resolution.url)
