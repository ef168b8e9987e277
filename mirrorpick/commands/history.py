"""Show recent resolutions from the audit log."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from ..audit import latest_resolutions
from ..utils import default_audit_log_path

if TYPE_CHECKING:
    from ..cli_types import HistoryArgs


def format_history_line(record: dict) -> str:
    """Format one resolution record as a single line."""
    ts = record.get("ts", "?")
    reason = record.get("reason", "?")
    url = record.get("url", "?")
    local_ip = record.get("local_ip") or "-"
    line = f"{ts}  {reason:<18} {local_ip:<15} {url}"
    if record.get("prefix"):
        line += f"  (prefix '{record['prefix']}')"
    if record.get("error"):
        line += f"  [{record['error']}]"
    return line


def cmd_history(args: HistoryArgs) -> None:
    """Print the most recent resolution records."""
    audit_log = Path(args.audit_log) if args.audit_log else default_audit_log_path()
    records = latest_resolutions(audit_log, limit=args.limit)

    if args.json:
        click.echo(json.dumps(records, indent=2, sort_keys=True))
        return
    if not records:
        click.echo(f"No resolutions recorded in {audit_log}")
        return
    for record in records:
        click.echo(format_history_line(record))
