"""Claude Code settings file (``~/.claude/settings.json``).

Expected shape::

    {
        "env": {
            "ANTHROPIC_AUTH_TOKEN": "...",      # TOKEN profiles
            "ANTHROPIC_API_KEY": "...",         # KEY profiles
            "ANTHROPIC_BASE_URL": "...",
            "CLAUDE_CODE_MAX_OUTPUT_TOKENS": "32000",
            ...
        },
        "permissions": {"allow": [...], "deny": [...]}
    }

Only the two credential variables and the base URL are ever changed. Every
other key, including ``permissions``, is written back as it was read.
"""

import json
from pathlib import Path
from typing import Any

import structlog

from acm_switch.enums import AUTH_TOKEN_ENV_VAR, BASE_URL_ENV_VAR
from acm_switch.exceptions import SettingsFileWriteError
from acm_switch.profiles.models import Profile
from acm_switch.utils.fileio import read_text, write_text_atomic

log = structlog.get_logger(__name__)

DEFAULT_MAX_OUTPUT_TOKENS = "32000"


def default_settings() -> dict[str, Any]:
    """Settings document used when the file is missing or unreadable."""
    return {
        "env": {
            AUTH_TOKEN_ENV_VAR: "",
            BASE_URL_ENV_VAR: "",
            "CLAUDE_CODE_MAX_OUTPUT_TOKENS": DEFAULT_MAX_OUTPUT_TOKENS,
            "CLAUDE_CODE_DISABLE_NONESSENTIAL_TRAFFIC": 1,
        },
        "permissions": {
            "allow": [],
            "deny": [],
        },
    }


class ClaudeSettingsFile:
    """Read-merge-write access to the Claude settings JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> dict[str, Any]:
        """Return the current settings, or defaults if missing or invalid.

        Undecodable text or JSON is not an error here: the caller writes a
        fresh document over it.

        Raises:
            OSError: If the file exists but cannot be read
        """
        try:
            content = read_text(self.path)
        except UnicodeDecodeError as e:
            log.warning("settings_file_invalid_encoding", path=str(self.path), error=str(e))
            return default_settings()

        if content is None:
            return default_settings()

        try:
            settings = json.loads(content)
        except json.JSONDecodeError as e:
            log.warning("settings_file_invalid_json", path=str(self.path), error=str(e))
            return default_settings()

        if not isinstance(settings, dict):
            log.warning("settings_file_not_object", path=str(self.path))
            return default_settings()

        if not isinstance(settings.get("env"), dict):
            settings["env"] = default_settings()["env"]
        if not isinstance(settings.get("permissions"), dict):
            settings["permissions"] = default_settings()["permissions"]
        return settings

    def apply(self, profile: Profile) -> None:
        """Inject ``profile``'s credential and base URL into the file.

        The credential variable of the other kind is removed so Claude Code
        never sees both.

        Raises:
            SettingsFileWriteError: On any read, serialization or write failure
        """
        try:
            settings = self.load()
            env = settings["env"]
            env.pop(profile.kind.other_env_var, None)
            env[profile.env_var] = profile.secret
            env[BASE_URL_ENV_VAR] = profile.base_url

            content = json.dumps(settings, indent=2, ensure_ascii=False)
            write_text_atomic(self.path, content)
        except (OSError, TypeError, ValueError) as e:
            raise SettingsFileWriteError(f"Cannot update Claude settings file {self.path}: {e}") from e

        log.info("settings_file_updated", path=str(self.path), alias=profile.alias, var_name=profile.env_var)
