"""Map a base URL and an optional override to a credential kind.

Pure table lookup, no I/O::

    >>> resolve_credential_kind("https://api.aicodemirror.com/api/claudecode")
    <CredentialKind.KEY: 'KEY'>
    >>> resolve_credential_kind("https://unknown.example.com")
    <CredentialKind.TOKEN: 'TOKEN'>
    >>> resolve_credential_kind("https://unknown.example.com", "k")
    <CredentialKind.KEY: 'KEY'>
"""

from acm_switch.enums import CredentialKind
from acm_switch.exceptions import CredentialKindError

# Relay services known to expect ANTHROPIC_AUTH_TOKEN
TOKEN_BASE_URLS = frozenset(
    {
        "https://code.wenwen-ai.com",
        "https://api.aicodewith.com",
    }
)

# Relay services known to expect ANTHROPIC_API_KEY
KEY_BASE_URLS = frozenset(
    {
        "https://api.aicodemirror.com/api/claudecode",
        "https://gaccode.com/claudecode",
    }
)

_OVERRIDE_ALIASES = {
    "key": CredentialKind.KEY,
    "k": CredentialKind.KEY,
    "token": CredentialKind.TOKEN,
    "t": CredentialKind.TOKEN,
}


def parse_credential_kind(value: str) -> CredentialKind:
    """Parse a user-supplied kind (case-insensitive key/k/token/t).

    Raises:
        CredentialKindError: If the value is not a recognized spelling
    """
    try:
        return _OVERRIDE_ALIASES[value.strip().lower()]
    except KeyError:
        raise CredentialKindError(value) from None


def resolve_credential_kind(base_url: str, override: str | None = None) -> CredentialKind:
    """Resolve the credential kind for a profile.

    Args:
        base_url: Profile base URL, compared exactly against the known tables
        override: Explicit kind from the user; wins over the URL tables

    Returns:
        The explicit kind if given, else the kind listed for ``base_url``,
        else TOKEN.

    Raises:
        CredentialKindError: If ``override`` is given but not recognized
    """
    if override:
        return parse_credential_kind(override)

    if base_url in TOKEN_BASE_URLS:
        return CredentialKind.TOKEN
    if base_url in KEY_BASE_URLS:
        return CredentialKind.KEY

    return CredentialKind.TOKEN
