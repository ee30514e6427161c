"""
Domain models for stored credential profiles.

A ``Profile`` is what the store holds and what the active pointer
snapshots. The pointer is a copy, not a reference: editing or removing the
stored profile later does not change what was activated.

Example:
    >>> profile = Profile(
    ...     alias="kimi",
    ...     display_name="Moonshot",
    ...     secret="sk-xxx",
    ...     base_url="https://api.moonshot.cn/anthropic",
    ... )
    >>> profile.kind
    <CredentialKind.TOKEN: 'TOKEN'>
"""

from collections.abc import Mapping
from dataclasses import dataclass

from acm_switch.enums import BASE_URL_ENV_VAR, CredentialKind

SECRET_PREVIEW_LENGTH = 15


@dataclass(frozen=True)
class Profile:
    """A named credential configuration.

    Attributes:
        alias: Unique key chosen by the user
        display_name: Free-text label
        secret: API key or auth token, stored in clear text
        base_url: Anthropic-compatible endpoint
        kind: How ``secret`` is presented (defaults to TOKEN)
    """

    alias: str
    display_name: str
    secret: str
    base_url: str
    kind: CredentialKind = CredentialKind.TOKEN

    @property
    def env_var(self) -> str:
        """Credential environment variable name for this profile's kind."""
        return self.kind.env_var

    @property
    def secret_preview(self) -> str:
        """First characters of the secret, safe to print."""
        return f"{self.secret[:SECRET_PREVIEW_LENGTH]}..."

    def env_values(self) -> dict[str, str]:
        """Environment variables this profile sets, base URL first."""
        return {BASE_URL_ENV_VAR: self.base_url, self.env_var: self.secret}

    def matches_environment(self, environ: Mapping[str, str]) -> bool:
        """Check if ``environ`` currently carries this profile's credential."""
        return environ.get(self.env_var) == self.secret and environ.get(BASE_URL_ENV_VAR) == self.base_url


@dataclass(frozen=True)
class CurrentProfile:
    """The active pointer snapshot plus a liveness check.

    Attributes:
        profile: Snapshot written at activation time
        is_active: True if the process environment matches the snapshot
    """

    profile: Profile
    is_active: bool

    @property
    def alias(self) -> str:
        return self.profile.alias


@dataclass(frozen=True)
class RemovalResult:
    """Outcome of removing a profile from the store."""

    profile: Profile
    active_cleared: bool
