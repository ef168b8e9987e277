"""Resolution context shared across resolve calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .endpoint import RepositoryEndpoint, parse_endpoint


@dataclass
class ResolutionContext:
    """Default repository plus the identity key used for sftp repositories.

    Only ``key_file`` is expected to change after construction.
    """

    default_url: str
    key_file: Path | None = None
    _endpoint: RepositoryEndpoint | None = field(default=None, init=False, repr=False)

    @property
    def endpoint(self) -> RepositoryEndpoint:
        """Parsed default endpoint (parsed once, raises ConfigError if invalid)."""
        if self._endpoint is None:
            self._endpoint = parse_endpoint(self.default_url)
        return self._endpoint
