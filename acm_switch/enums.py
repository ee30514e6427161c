"""Enumerations for credential kinds and host shells."""

from enum import Enum

BASE_URL_ENV_VAR = "ANTHROPIC_BASE_URL"
AUTH_TOKEN_ENV_VAR = "ANTHROPIC_AUTH_TOKEN"
API_KEY_ENV_VAR = "ANTHROPIC_API_KEY"


class CredentialKind(str, Enum):
    """How a profile's secret is presented to Claude Code.

    TOKEN secrets are sent as bearer tokens (``ANTHROPIC_AUTH_TOKEN``),
    KEY secrets as API keys (``ANTHROPIC_API_KEY``).
    """

    KEY = "KEY"
    TOKEN = "TOKEN"

    def __str__(self) -> str:
        return self.value

    @property
    def env_var(self) -> str:
        """Environment variable that carries a secret of this kind."""
        if self == CredentialKind.KEY:
            return API_KEY_ENV_VAR
        return AUTH_TOKEN_ENV_VAR

    @property
    def other_env_var(self) -> str:
        """Credential variable of the opposite kind, cleared on activation."""
        if self == CredentialKind.KEY:
            return AUTH_TOKEN_ENV_VAR
        return API_KEY_ENV_VAR


class ShellKind(str, Enum):
    """Host shell families the activation engine knows how to configure."""

    ZSH = "zsh"
    BASH = "bash"
    POWERSHELL = "powershell"
    CMD = "cmd"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value
