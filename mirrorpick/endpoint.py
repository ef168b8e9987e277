"""Repository URL parsing."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import unquote, urlsplit

from .constants import DEFAULT_PORTS, SCHEME_KINDS, SCHEME_PLAIN, SCHEME_SECURE, SECURE_PORT
from .exceptions import ConfigError


@dataclass(frozen=True)
class RepositoryEndpoint:
    """A parsed repository location.

    ``kind`` is ``"plain"`` (http/https), ``"secure"`` (sftp) or ``None`` for
    schemes we never contact.
    """

    url: str
    scheme: str
    host: str
    port: int | None
    path: str
    username: str | None = None

    @property
    def kind(self) -> str | None:
        return SCHEME_KINDS.get(self.scheme)

    @property
    def is_supported(self) -> bool:
        return self.kind is not None

    @property
    def is_secure(self) -> bool:
        return self.kind == SCHEME_SECURE

    @property
    def is_plain(self) -> bool:
        return self.kind == SCHEME_PLAIN

    @property
    def probe_port(self) -> int:
        """Port used for the connectivity probe."""
        if self.is_secure:
            return self.port if self.port is not None else SECURE_PORT
        if self.port is not None:
            return self.port
        try:
            return DEFAULT_PORTS[self.scheme]
        except KeyError:
            raise ConfigError(f"No default port known for scheme {self.scheme!r}") from None

    @property
    def ssh_target(self) -> str:
        """Return user@host (or host) for the ssh client."""
        if self.username:
            return f"{self.username}@{self.host}"
        return self.host


def parse_endpoint(url: str) -> RepositoryEndpoint:
    """Parse a repository URL into a RepositoryEndpoint.

    Unsupported schemes parse fine (so callers can report them); a URL
    without a scheme or, for supported schemes, without a host raises
    ConfigError.
    """
    url = url.strip()
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    if not scheme:
        raise ConfigError(f"Repository URL has no scheme: {url!r}")

    try:
        port = parts.port
    except ValueError as e:
        raise ConfigError(f"Invalid port in repository URL {url!r}: {e}") from e

    host = parts.hostname or ""
    if scheme in SCHEME_KINDS and not host:
        raise ConfigError(f"Repository URL has no host: {url!r}")
    if host.startswith("-"):
        raise ConfigError(f"Invalid host in repository URL: {url!r}")

    return RepositoryEndpoint(
        url=url,
        scheme=scheme,
        host=host,
        port=port,
        path=unquote(parts.path),
        username=unquote(parts.username) if parts.username else None,
    )
