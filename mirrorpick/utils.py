"""MirrorPick utility functions."""

from __future__ import annotations

import datetime as dt
import os
from pathlib import Path

from .constants import AUDIT_DIR_NAME, AUDIT_FILE_NAME


def utc_now_iso() -> str:
    """Return current UTC time in ISO format without microseconds."""
    return dt.datetime.now(dt.UTC).replace(microsecond=0).isoformat()


def ensure_parent_dir(p: Path) -> None:
    """Create parent directory of path if it doesn't exist."""
    p.parent.mkdir(parents=True, exist_ok=True)


def infer_actor() -> str:
    """Infer the actor (user) performing the operation."""
    return (
        os.environ.get("MIRRORPICK_ACTOR")
        or os.environ.get("SUDO_USER")
        or os.environ.get("USER")
        or "unknown"
    )


def default_audit_log_path() -> Path:
    """Return default path for audit log file."""
    home = Path(os.path.expanduser("~"))
    return home / AUDIT_DIR_NAME / AUDIT_FILE_NAME
