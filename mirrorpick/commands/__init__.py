"""MirrorPick command implementations."""

from __future__ import annotations

from .history import cmd_history
from .probe import cmd_probe
from .resolve import cmd_resolve
from .show_config import cmd_show_config

__all__ = [
    "cmd_history",
    "cmd_probe",
    "cmd_resolve",
    "cmd_show_config",
]
