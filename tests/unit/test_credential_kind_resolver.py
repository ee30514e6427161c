"""Tests for acm_switch/credentials/resolver.py - credential kind lookup."""

import pytest

from acm_switch.credentials import (
    KEY_BASE_URLS,
    TOKEN_BASE_URLS,
    parse_credential_kind,
    resolve_credential_kind,
)
from acm_switch.enums import CredentialKind
from acm_switch.exceptions import CredentialKindError


class TestResolveFromUrl:
    """URL table lookup without an override."""

    @pytest.mark.parametrize(
        "base_url,expected",
        [
            ("https://api.aicodemirror.com/api/claudecode", CredentialKind.KEY),
            ("https://gaccode.com/claudecode", CredentialKind.KEY),
            ("https://api.aicodewith.com", CredentialKind.TOKEN),
            ("https://code.wenwen-ai.com", CredentialKind.TOKEN),
            ("https://unknown.example.com", CredentialKind.TOKEN),
        ],
    )
    def test_known_and_unknown_urls(self, base_url, expected):
        assert resolve_credential_kind(base_url) == expected

    def test_match_is_exact(self):
        """A trailing slash is a different URL and falls back to TOKEN."""
        assert resolve_credential_kind("https://api.aicodemirror.com/api/claudecode/") == CredentialKind.TOKEN

    def test_tables_do_not_overlap(self):
        assert not TOKEN_BASE_URLS & KEY_BASE_URLS


class TestResolveWithOverride:
    """Explicit overrides win over the URL tables."""

    @pytest.mark.parametrize(
        "override,expected",
        [
            ("key", CredentialKind.KEY),
            ("k", CredentialKind.KEY),
            ("KEY", CredentialKind.KEY),
            ("token", CredentialKind.TOKEN),
            ("T", CredentialKind.TOKEN),
            ("TOKEN", CredentialKind.TOKEN),
        ],
    )
    def test_override_spellings(self, override, expected):
        assert resolve_credential_kind("https://unknown.example.com", override) == expected

    def test_override_beats_url_table(self):
        assert resolve_credential_kind("https://api.aicodewith.com", "key") == CredentialKind.KEY
        assert resolve_credential_kind("https://gaccode.com/claudecode", "token") == CredentialKind.TOKEN

    def test_empty_override_uses_url_table(self):
        assert resolve_credential_kind("https://gaccode.com/claudecode", "") == CredentialKind.KEY

    def test_unrecognized_override_is_rejected(self):
        with pytest.raises(CredentialKindError) as exc_info:
            resolve_credential_kind("https://gaccode.com/claudecode", "bearer")

        assert exc_info.value.value == "bearer"
        assert "bearer" in exc_info.value.message
        assert exc_info.value.suggestion is not None


def test_parse_credential_kind_strips_whitespace():
    assert parse_credential_kind("  Key ") == CredentialKind.KEY
