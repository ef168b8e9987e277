"""Type definitions for CLI command arguments."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ResolveArgs:
    """Arguments for resolve command."""

    url: str
    key_file: str | None
    probe_timeout: float
    fetch_timeout: float
    json: bool
    audit_log: str | None
    no_audit: bool


@dataclass
class ShowConfigArgs:
    """Arguments for show-config command."""

    url: str
    key_file: str | None
    fetch_timeout: float
    json: bool


@dataclass
class ProbeArgs:
    """Arguments for probe command."""

    url: str
    timeout: float


@dataclass
class HistoryArgs:
    """Arguments for history command."""

    audit_log: str | None
    limit: int
    json: bool
