"""
MirrorPick - choose the blueprint repository mirror that fits this machine.

Design goals:
- Resolution never fails: any error falls back to the default repository.
- Uses the real route to the repository (a TCP connect), not interface lists.
- Uses your existing SSH client for sftp repositories, with strict host keys.
"""

from __future__ import annotations

from .cli import main
from .exceptions import (
    ConfigError,
    ConnectivityError,
    MirrorPickError,
    UnsupportedSchemeError,
    UserError,
)
from .resolver import RepositoryResolver, Resolution

__all__ = [
    "ConfigError",
    "ConnectivityError",
    "MirrorPickError",
    "RepositoryResolver",
    "Resolution",
    "UnsupportedSchemeError",
    "UserError",
    "main",
]
