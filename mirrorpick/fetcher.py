"""Fetching and parsing the mirror-selection config."""

from __future__ import annotations

import logging
import posixpath
import tempfile
from pathlib import Path

import requests

from .constants import (
    CONFIG_FETCH_TIMEOUT_S,
    DIST_DIR,
    RESOLVE_CONFIG_FILE,
    SSH_TIMEOUT_EXIT_CODE,
)
from .context import ResolutionContext
from .endpoint import RepositoryEndpoint
from .exceptions import ConfigError, MirrorPickError
from .ssh import build_ssh_options, is_missing_file_error, run_sftp, sftp_get_batch

logger = logging.getLogger("mirrorpick")

# Ordered prefix -> repository URL; iteration order is declaration order.
MirrorTable = dict[str, str]

_NOT_FOUND_STATUS = {404, 410}


def config_url(default_url: str) -> str:
    """Return the URL of the mirror config under the default repository."""
    return f"{default_url.rstrip('/')}/{DIST_DIR}/{RESOLVE_CONFIG_FILE}"


def _split_property(line: str) -> tuple[str, str] | None:
    """Split a properties line on the first '=' (or ':' when no '=' precedes it)."""
    positions = [i for i in (line.find("="), line.find(":")) if i >= 0]
    if not positions:
        return None
    idx = min(positions)
    return line[:idx].strip(), line[idx + 1 :].strip()


def parse_mirror_table(text: str, *, log: logging.Logger | None = None) -> MirrorTable:
    """Parse ``prefix=url`` lines into an ordered MirrorTable.

    Blank lines and lines starting with '#' or '!' are ignored. A repeated
    prefix keeps its first position but takes the later value.

    Raises:
        ConfigError: on a line without a separator or with an empty side.
    """
    log = log or logger
    table: MirrorTable = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith(("#", "!")):
            continue
        parts = _split_property(line)
        if parts is None:
            raise ConfigError(f"Malformed mirror config line {lineno}: {raw!r}")
        prefix, url = parts
        if not prefix or not url:
            raise ConfigError(f"Malformed mirror config line {lineno}: {raw!r}")
        if prefix in table:
            log.debug("Prefix '%s' redefined on line %d, using %s", prefix, lineno, url)
        table[prefix] = url
    return table


def validate_key_file(key_file: Path | None) -> Path:
    """Check that the identity key exists and is a regular file."""
    if key_file is None:
        raise ConfigError("No key file configured for sftp repository")
    path = Path(key_file).expanduser()
    if not path.exists():
        raise ConfigError(f"Key file not found: {path}")
    if not path.is_file():
        raise ConfigError(f"Key file is not a file: {path}")
    return path


def _fetch_plain(url: str, *, timeout_s: float, log: logging.Logger) -> str | None:
    try:
        response = requests.get(url, timeout=timeout_s)
    except requests.RequestException as e:
        raise ConfigError(f"Failed to fetch {url}: {e}") from e

    if response.status_code in _NOT_FOUND_STATUS:
        log.info("No repository config found at %s (HTTP %d)", url, response.status_code)
        return None
    try:
        response.raise_for_status()
    except requests.HTTPError as e:
        raise ConfigError(f"Failed to fetch {url}: {e}") from e
    return response.text


def _fetch_secure(
    endpoint: RepositoryEndpoint,
    key_file: Path,
    *,
    timeout_s: float,
    log: logging.Logger,
) -> str | None:
    remote_path = posixpath.join(endpoint.path or "/", DIST_DIR, RESOLVE_CONFIG_FILE)
    ssh_opts = build_ssh_options(key_file, port=endpoint.port)
    with tempfile.TemporaryDirectory(prefix="mirrorpick-") as tmp:
        local_path = Path(tmp) / RESOLVE_CONFIG_FILE
        try:
            rc, _, err = run_sftp(
                endpoint.ssh_target,
                sftp_get_batch(remote_path, local_path),
                ssh_options=ssh_opts,
                timeout_s=timeout_s,
            )
        except MirrorPickError as e:
            raise ConfigError(str(e)) from e

        if rc == SSH_TIMEOUT_EXIT_CODE:
            raise ConfigError(
                f"Timed out after {timeout_s}s reading {remote_path} from {endpoint.ssh_target}"
            )
        if rc != 0:
            if is_missing_file_error(err):
                log.info(
                    "No repository config found at %s:%s", endpoint.ssh_target, remote_path
                )
                return None
            raise ConfigError(
                f"sftp to {endpoint.ssh_target} failed (rc={rc}): {err.strip() or 'no output'}"
            )
        try:
            return local_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise ConfigError(f"sftp reported success but {remote_path} was not saved: {e}") from e


def fetch_mirror_table(
    context: ResolutionContext,
    *,
    timeout_s: float = CONFIG_FETCH_TIMEOUT_S,
    log: logging.Logger | None = None,
) -> MirrorTable | None:
    """Fetch the mirror table for the context's default repository.

    Returns None when the scheme is not supported (no network attempt) or
    when the repository has no config file.

    Raises:
        ConfigError: invalid key file, transport failure or unparsable content.
    """
    log = log or logger
    endpoint = context.endpoint
    if not endpoint.is_supported:
        log.info("Resolving repository config not implemented for scheme %s", endpoint.scheme)
        return None

    url = config_url(context.default_url)
    if endpoint.is_secure:
        key_file = validate_key_file(context.key_file)
        log.info("Looking for repository config at %s (key %s)", url, key_file)
        text = _fetch_secure(endpoint, key_file, timeout_s=timeout_s, log=log)
    else:
        log.info("Looking for repository config at %s", url)
        text = _fetch_plain(url, timeout_s=timeout_s, log=log)

    if text is None:
        return None
    table = parse_mirror_table(text, log=log)
    log.debug("Loaded %d mirror entries from %s", len(table), url)
    return table
