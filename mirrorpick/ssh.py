"""MirrorPick SFTP execution for sftp repositories."""

from __future__ import annotations

import logging
import subprocess
import time
from pathlib import Path

from .constants import SSH_CONNECT_TIMEOUT_S, SSH_TIMEOUT_EXIT_CODE
from .exceptions import MirrorPickError

logger = logging.getLogger("mirrorpick")

# stderr fragments the sftp client prints for a missing remote file
_MISSING_FILE_MARKERS = ('" not found', "No such file")


def run_sftp(
    host: str,
    batch: str,
    *,
    ssh_options: list[str],
    timeout_s: float = 60,
) -> tuple[int, str, str]:
    """
    Executes: sftp -b - [opts...] -- host, feeding ``batch`` on stdin.

    Returns (returncode, stdout, stderr). Does NOT raise on non-zero rc.
    """
    cmd = ["sftp", "-b", "-", "-o", "BatchMode=yes"] + ssh_options + ["--", host]
    logger.debug("SFTP command: sftp %s %s '<batch>'", " ".join(ssh_options), host)
    logger.debug("SFTP timeout: %.1fs", timeout_s)

    start_time = time.time()
    try:
        p = subprocess.run(
            cmd,
            input=batch.encode("utf-8"),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=timeout_s,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        elapsed = time.time() - start_time
        logger.debug("SFTP timeout after %.2fs", elapsed)
        return (
            SSH_TIMEOUT_EXIT_CODE,
            e.stdout.decode("utf-8", "replace") if e.stdout else "",
            e.stderr.decode("utf-8", "replace") if e.stderr else "sftp timeout",
        )
    except FileNotFoundError:
        raise MirrorPickError(
            "sftp binary not found on PATH. Install OpenSSH client (sftp)."
        ) from None

    elapsed = time.time() - start_time
    logger.debug("SFTP completed in %.2fs (rc=%d)", elapsed, p.returncode)
    return (
        p.returncode,
        p.stdout.decode("utf-8", "replace"),
        p.stderr.decode("utf-8", "replace"),
    )


def build_ssh_options(
    key_file: Path,
    *,
    connect_timeout: int = SSH_CONNECT_TIMEOUT_S,
    port: int | None = None,
) -> list[str]:
    """Build SSH options for a key-authenticated repository connection."""
    opts: list[str] = []
    opts += ["-o", f"ConnectTimeout={connect_timeout}"]
    opts += ["-o", f"IdentityFile={key_file}"]
    # Only the given key; agent keys must not stand in for it.
    opts += ["-o", "IdentitiesOnly=yes"]
    # Unknown or changed host keys always fail. Not overridable.
    opts += ["-o", "StrictHostKeyChecking=yes"]
    if port is not None:
        opts += ["-o", f"Port={port}"]
    return opts


def sftp_quote(path: str) -> str:
    """Quote a path for an sftp batch command."""
    escaped = path.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def sftp_get_batch(remote_path: str, local_path: Path) -> str:
    """Generate the sftp batch that downloads remote_path to local_path."""
    return f"get {sftp_quote(remote_path)} {sftp_quote(str(local_path))}\n"


def is_missing_file_error(stderr: str) -> bool:
    """Return True if sftp stderr reports a missing remote file."""
    return any(marker in stderr for marker in _MISSING_FILE_MARKERS)
