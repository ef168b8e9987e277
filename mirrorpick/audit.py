"""MirrorPick audit logging functions."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .constants import AUDIT_ACTION_RESOLVE
from .utils import ensure_parent_dir, utc_now_iso

if TYPE_CHECKING:
    from .resolver import Resolution


def append_jsonl(path: Path, record: dict[str, Any]) -> None:
    """Append a JSON record to a JSONL file."""
    ensure_parent_dir(path)
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(record, sort_keys=True) + "\n")


def iter_audit_records(path: Path) -> Iterable[dict[str, Any]]:
    """Yield JSONL records from the audit log, skipping invalid lines."""
    try:
        with path.open("r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    yield json.loads(line)
                except json.JSONDecodeError:
                    continue
    except FileNotFoundError:
        return


def resolution_record(resolution: Resolution, *, actor: str) -> dict[str, Any]:
    """Build the audit record for one resolution."""
    record: dict[str, Any] = {
        "ts": utc_now_iso(),
        "actor": actor,
        "action": AUDIT_ACTION_RESOLVE,
    }
    record.update(resolution.to_dict())
    return record


def latest_resolutions(path: Path, *, limit: int) -> list[dict[str, Any]]:
    """Return the last ``limit`` resolution records, oldest first."""
    records = [r for r in iter_audit_records(path) if r.get("action") == AUDIT_ACTION_RESOLVE]
    if limit <= 0:
        return []
    return records[-limit:]
