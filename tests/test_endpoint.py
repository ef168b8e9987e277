"""Tests for mirrorpick/endpoint.py - repository URL parsing."""

from __future__ import annotations

import pytest
from mirrorpick.endpoint import parse_endpoint
from mirrorpick.exceptions import ConfigError


class TestParseEndpoint:
    """Tests for parse_endpoint function."""

    def test_http_url(self):
        """Plain http URL parses host, path and no explicit port."""
        ep = parse_endpoint("http://repo.example.com/kipeto")
        assert ep.scheme == "http"
        assert ep.host == "repo.example.com"
        assert ep.port is None
        assert ep.path == "/kipeto"
        assert ep.kind == "plain"
        assert ep.is_plain
        assert not ep.is_secure

    def test_https_is_plain(self):
        """https is treated as the unauthenticated transport."""
        assert parse_endpoint("https://repo.example.com").kind == "plain"

    def test_sftp_url_with_user(self):
        """sftp URL keeps the user for the ssh target."""
        ep = parse_endpoint("sftp://deploy@repo.example.com/srv/repo")
        assert ep.kind == "secure"
        assert ep.username == "deploy"
        assert ep.ssh_target == "deploy@repo.example.com"
        assert ep.path == "/srv/repo"

    def test_sftp_without_user(self):
        """ssh target is just the host without a user."""
        assert parse_endpoint("sftp://repo.example.com/srv").ssh_target == "repo.example.com"

    def test_scheme_is_case_insensitive(self):
        """Upper-case schemes are normalized."""
        assert parse_endpoint("HTTP://repo.example.com").scheme == "http"

    def test_unsupported_scheme_parses(self):
        """file:// URLs parse but are not supported."""
        ep = parse_endpoint("file:///var/kipeto")
        assert ep.scheme == "file"
        assert ep.kind is None
        assert not ep.is_supported

    def test_missing_scheme_raises(self):
        """A bare path is rejected."""
        with pytest.raises(ConfigError, match="no scheme"):
            parse_endpoint("/var/kipeto")

    def test_missing_host_raises(self):
        """Supported schemes require a host."""
        with pytest.raises(ConfigError, match="no host"):
            parse_endpoint("http:///path")

    def test_path_is_percent_decoded(self):
        """Encoded characters in the path are decoded."""
        assert parse_endpoint("sftp://repo.example.com/my%20repo").path == "/my repo"

    def test_option_like_host_raises(self):
        """Hosts starting with '-' would be read as client options."""
        with pytest.raises(ConfigError, match="Invalid host"):
            parse_endpoint("sftp://-oProxyCommand=x/srv")

    def test_invalid_port_raises(self):
        """Non-numeric port is rejected."""
        with pytest.raises(ConfigError, match="Invalid port"):
            parse_endpoint("http://repo.example.com:abc/")


class TestProbePort:
    """Tests for RepositoryEndpoint.probe_port."""

    def test_http_default(self):
        assert parse_endpoint("http://repo.example.com/").probe_port == 80

    def test_https_default(self):
        assert parse_endpoint("https://repo.example.com/").probe_port == 443

    def test_http_explicit_port(self):
        assert parse_endpoint("http://repo.example.com:8080/").probe_port == 8080

    def test_sftp_default_is_22(self):
        assert parse_endpoint("sftp://repo.example.com/srv").probe_port == 22

    def test_sftp_explicit_port_overrides(self):
        """An explicit port in an sftp URL wins over 22."""
        assert parse_endpoint("sftp://repo.example.com:2222/srv").probe_port == 2222

    def test_unsupported_scheme_has_no_port(self):
        with pytest.raises(ConfigError, match="No default port"):
            _ = parse_endpoint("ftp://repo.example.com/").probe_port
