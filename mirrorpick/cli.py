"""MirrorPick CLI using Click."""

from __future__ import annotations

import logging
import sys
from importlib.metadata import version

import click

from .cli_types import HistoryArgs, ProbeArgs, ResolveArgs, ShowConfigArgs
from .commands import cmd_history, cmd_probe, cmd_resolve, cmd_show_config
from .constants import CONFIG_FETCH_TIMEOUT_S, HISTORY_DEFAULT_LIMIT, PROBE_CONNECT_TIMEOUT_S
from .exceptions import MirrorPickError, UserError

# Module logger
logger = logging.getLogger("mirrorpick")


def setup_logging(debug: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if debug else logging.WARNING
    logger.setLevel(level)
    if any(
        isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stderr
        for h in logger.handlers
    ):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)


def key_file_option(func):
    """Decorator for the sftp identity key option."""
    return click.option(
        "--key-file",
        "-k",
        type=click.Path(),
        help="SSH private key for sftp repositories.",
    )(func)


def fetch_timeout_option(func):
    """Decorator for the config fetch timeout option."""
    return click.option(
        "--fetch-timeout",
        type=float,
        default=CONFIG_FETCH_TIMEOUT_S,
        show_default=True,
        help="Timeout in seconds for fetching the mirror config.",
    )(func)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=version("mirrorpick"), prog_name="mirrorpick")
@click.option(
    "--debug",
    "-d",
    is_flag=True,
    help="Enable debug logging to stderr.",
)
def cli(debug: bool):
    """MirrorPick: choose the blueprint repository mirror for this machine."""
    setup_logging(debug=debug)


@cli.command("resolve")
@click.argument("url")
@key_file_option
@fetch_timeout_option
@click.option(
    "--probe-timeout",
    type=float,
    default=PROBE_CONNECT_TIMEOUT_S,
    show_default=True,
    help="Connect timeout in seconds for the connectivity probe.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Emit the full resolution record as JSON.",
)
@click.option(
    "--audit-log",
    type=click.Path(),
    help="Path to local JSONL audit log (default: ~/.mirrorpick/audit.jsonl).",
)
@click.option(
    "--no-audit",
    is_flag=True,
    help="Do not record the resolution in the audit log.",
)
def resolve(
    url: str,
    key_file: str | None,
    fetch_timeout: float,
    probe_timeout: float,
    json_output: bool,
    audit_log: str | None,
    no_audit: bool,
):
    """Print the repository URL to use for URL on this machine.

    Falls back to URL itself whenever no mirror can be selected.
    """
    args = ResolveArgs(
        url=url,
        key_file=key_file,
        probe_timeout=probe_timeout,
        fetch_timeout=fetch_timeout,
        json=json_output,
        audit_log=audit_log,
        no_audit=no_audit,
    )
    cmd_resolve(args)


@cli.command("show-config")
@click.argument("url")
@key_file_option
@fetch_timeout_option
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Emit entries as JSON.",
)
def show_config(url: str, key_file: str | None, fetch_timeout: float, json_output: bool):
    """Show the mirror config published by the repository at URL."""
    args = ShowConfigArgs(
        url=url,
        key_file=key_file,
        fetch_timeout=fetch_timeout,
        json=json_output,
    )
    cmd_show_config(args)


@cli.command("probe")
@click.argument("url")
@click.option(
    "--timeout",
    type=float,
    default=PROBE_CONNECT_TIMEOUT_S,
    show_default=True,
    help="Connect timeout in seconds.",
)
def probe(url: str, timeout: float):
    """Print the local IP address used to reach the repository at URL."""
    cmd_probe(ProbeArgs(url=url, timeout=timeout))


@cli.command("history")
@click.option(
    "--audit-log",
    type=click.Path(),
    help="Path to local JSONL audit log (default: ~/.mirrorpick/audit.jsonl).",
)
@click.option(
    "--limit",
    "-n",
    type=int,
    default=HISTORY_DEFAULT_LIMIT,
    show_default=True,
    help="Number of records to show.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Emit records as JSON.",
)
def history(audit_log: str | None, limit: int, json_output: bool):
    """Show recent resolutions from the audit log."""
    cmd_history(HistoryArgs(audit_log=audit_log, limit=limit, json=json_output))


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except UserError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(e.rc)
    except MirrorPickError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(2)
    except KeyboardInterrupt:
        click.echo("ERROR: Interrupted", err=True)
        sys.exit(130)
