"""In-process environment surface.

Changes made here are visible to this process and to any child it starts
(for example a ``claude`` launched from a wrapper script). They cannot
reach the parent shell.
"""

import os
from collections.abc import MutableMapping

import structlog

from acm_switch.enums import API_KEY_ENV_VAR, AUTH_TOKEN_ENV_VAR, BASE_URL_ENV_VAR
from acm_switch.profiles.models import Profile

log = structlog.get_logger(__name__)


class ProcessEnvironment:
    """Environment variable access over an injectable mapping.

    Defaults to ``os.environ``; tests pass a plain dict.

    Example:
        >>> env = ProcessEnvironment({})
        >>> env.apply_profile(profile)
        >>> env.environ["ANTHROPIC_BASE_URL"]
        'https://api.moonshot.cn/anthropic'
    """

    def __init__(self, environ: MutableMapping[str, str] | None = None) -> None:
        self.environ = os.environ if environ is None else environ

    def delete(self, var_name: str) -> bool:
        """Remove a variable.

        Returns:
            True if deleted, False if not set
        """
        if var_name in self.environ:
            del self.environ[var_name]
            log.debug("environment_variable_deleted", var_name=var_name)
            return True
        return False

    def apply_profile(self, profile: Profile) -> None:
        """Expose ``profile`` through the process environment.

        Both credential variables are cleared first so only the one that
        matches the profile's kind is left set.
        """
        self.delete(AUTH_TOKEN_ENV_VAR)
        self.delete(API_KEY_ENV_VAR)
        self.environ[profile.env_var] = profile.secret
        self.environ[BASE_URL_ENV_VAR] = profile.base_url
        log.debug("process_environment_updated", alias=profile.alias, var_name=profile.env_var)
