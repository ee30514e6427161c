"""Credential kind resolution.

Decides whether a profile's secret is presented as an API key or as an
auth token, from an explicit override or the profile's base URL.
"""

from acm_switch.credentials.resolver import (
    KEY_BASE_URLS,
    TOKEN_BASE_URLS,
    parse_credential_kind,
    resolve_credential_kind,
)

__all__ = [
    "KEY_BASE_URLS",
    "TOKEN_BASE_URLS",
    "parse_credential_kind",
    "resolve_credential_kind",
]
