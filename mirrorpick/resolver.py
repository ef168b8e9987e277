"""Repository resolution: pick the mirror that fits this machine's network."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from .constants import CONFIG_FETCH_TIMEOUT_S, PROBE_CONNECT_TIMEOUT_S
from .context import ResolutionContext
from .exceptions import ConfigError, ConnectivityError, UnsupportedSchemeError
from .fetcher import fetch_mirror_table
from .probe import determine_local_address
from .selector import find_matching_prefix

REASON_UNSUPPORTED_SCHEME = "unsupported-scheme"
REASON_NO_CONFIG = "no-config"
REASON_CONFIG_ERROR = "config-error"
REASON_PROBE_FAILED = "probe-failed"
REASON_NO_MATCH = "no-match"
REASON_MATCHED = "matched"
REASON_UNEXPECTED_ERROR = "unexpected-error"


@dataclass(frozen=True)
class Resolution:
    """Outcome of one resolve call. ``url`` is always usable."""

    url: str
    default_url: str
    reason: str
    local_ip: str | None = None
    prefix: str | None = None
    error: str | None = None

    @property
    def selected(self) -> bool:
        return self.reason == REASON_MATCHED

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["selected"] = self.selected
        return d


class RepositoryResolver:
    """Resolve the repository URL to use for this machine.

    Fetches ``dist/repos_resolve.properties`` from the default repository,
    probes which local address reaches it, and picks the first mirror whose
    prefix matches. Every failure falls back to the default URL.
    """

    def __init__(
        self,
        default_url: str,
        *,
        key_file: Path | str | None = None,
        logger: logging.Logger | None = None,
        probe_timeout_s: float = PROBE_CONNECT_TIMEOUT_S,
        fetch_timeout_s: float = CONFIG_FETCH_TIMEOUT_S,
    ):
        self.context = ResolutionContext(
            default_url=default_url,
            key_file=Path(key_file) if key_file is not None else None,
        )
        self.log = logger or logging.getLogger("mirrorpick")
        self.probe_timeout_s = probe_timeout_s
        self.fetch_timeout_s = fetch_timeout_s

    @property
    def default_url(self) -> str:
        return self.context.default_url

    def set_key_file(self, key_file: Path | str | None) -> None:
        """Set the identity key used for sftp repositories."""
        self.context.key_file = Path(key_file) if key_file is not None else None

    def resolve(self) -> str:
        """Return the repository URL to use. Never raises."""
        return self.resolve_detailed().url

    def resolve_detailed(self) -> Resolution:
        """Resolve and return the full decision record. Never raises."""
        try:
            return self._resolve()
        except Exception as e:
            self.log.exception("Repository resolution failed for %s", self.default_url)
            return self._fallback(REASON_UNEXPECTED_ERROR, error=str(e))

    def _fallback(self, reason: str, **kwargs: Any) -> Resolution:
        return Resolution(
            url=self.default_url,
            default_url=self.default_url,
            reason=reason,
            **kwargs,
        )

    def _resolve(self) -> Resolution:
        # SchemeCheck
        try:
            endpoint = self.context.endpoint
            if not endpoint.is_supported:
                raise UnsupportedSchemeError(endpoint.scheme)
        except UnsupportedSchemeError as e:
            self.log.info(
                "Resolving repository config not implemented for scheme %s, using %s",
                e.scheme,
                self.default_url,
            )
            return self._fallback(REASON_UNSUPPORTED_SCHEME, error=str(e))
        except ConfigError as e:
            self.log.error("Invalid default repository %s: %s", self.default_url, e)
            return self._fallback(REASON_CONFIG_ERROR, error=str(e))

        # FetchConfig
        try:
            table = fetch_mirror_table(
                self.context, timeout_s=self.fetch_timeout_s, log=self.log
            )
        except ConfigError as e:
            self.log.error(
                "Could not load repository config for %s (scheme %s): %s",
                self.default_url,
                endpoint.scheme,
                e,
            )
            return self._fallback(REASON_CONFIG_ERROR, error=str(e))
        if table is None:
            self.log.info("No repository config, using default repository %s", self.default_url)
            return self._fallback(REASON_NO_CONFIG)

        # ProbeAddress
        try:
            local_ip = determine_local_address(
                endpoint, timeout_s=self.probe_timeout_s, log=self.log
            )
        except ConnectivityError as e:
            self.log.error(
                "Connectivity probe failed (timeout %.1fs): %s, using default repository %s",
                self.probe_timeout_s,
                e,
                self.default_url,
            )
            return self._fallback(REASON_PROBE_FAILED, error=str(e))

        # SelectMirror
        prefix = find_matching_prefix(local_ip, table, log=self.log)
        if prefix is None:
            self.log.warning(
                "No matching config entry found for %s, falling back to default repository %s",
                local_ip,
                self.default_url,
            )
            return self._fallback(REASON_NO_MATCH, local_ip=local_ip)

        return Resolution(
            url=table[prefix],
            default_url=self.default_url,
            reason=REASON_MATCHED,
            local_ip=local_ip,
            prefix=prefix,
        )
