"""MirrorPick constants."""

from __future__ import annotations

# Repository layout
DIST_DIR = "dist"
RESOLVE_CONFIG_FILE = "repos_resolve.properties"

# Scheme kinds
SCHEME_PLAIN = "plain"
SCHEME_SECURE = "secure"
SCHEME_KINDS = {
    "http": SCHEME_PLAIN,
    "https": SCHEME_PLAIN,
    "sftp": SCHEME_SECURE,
}
DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
    "sftp": 22,
}
SECURE_PORT = 22

# Timeouts
PROBE_CONNECT_TIMEOUT_S = 3.0
CONFIG_FETCH_TIMEOUT_S = 10
SSH_CONNECT_TIMEOUT_S = 5

# SFTP exit codes
SSH_TIMEOUT_EXIT_CODE = 124

# Audit log
AUDIT_DIR_NAME = ".mirrorpick"
AUDIT_FILE_NAME = "audit.jsonl"
AUDIT_ACTION_RESOLVE = "repo.resolve"
HISTORY_DEFAULT_LIMIT = 20
