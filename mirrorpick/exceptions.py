"""MirrorPick exception classes."""

from __future__ import annotations


class MirrorPickError(RuntimeError):
    """Base exception for MirrorPick errors."""


class UserError(MirrorPickError):
    """Errors that should be shown to user without traceback."""

    def __init__(self, message: str, rc: int = 2):
        super().__init__(message)
        self.rc = rc


class ConnectivityError(MirrorPickError):
    """Probe target unreachable or connect timed out."""


class ConfigError(MirrorPickError):
    """Mirror config could not be fetched or parsed, or the key file is invalid."""


class UnsupportedSchemeError(MirrorPickError):
    """Repository scheme is outside the supported allow-list."""

    def __init__(self, scheme: str):
        super().__init__(f"Unsupported repository scheme: {scheme or '<none>'}")
        self.scheme = scheme
