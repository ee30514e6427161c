"""
Configuration for acm-switch using pydantic-settings.

All file locations used by the profile store and the activation engine are
derived from one ``AcmSettings`` instance. Nothing else in the package
hard-codes a path, so tests (and users, through ``ACM_*`` environment
variables or ``--home``) can point everything at another root.

Layout under the default root::

    ~/.claude/.claude_config    profile list, one record per line
    ~/.claude/.claude_current   active pointer, single record
    ~/.claude/settings.json     Claude Code settings file
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from acm_switch.exceptions import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AcmSettings(BaseSettings):
    """acm-switch settings.

    Every field can be set from the environment with the ``ACM_`` prefix,
    e.g. ``ACM_HOME=/tmp/sandbox`` or ``ACM_LOG_LEVEL=debug``.
    """

    model_config = SettingsConfigDict(
        env_prefix="ACM_",
        case_sensitive=False,
    )

    home: Path = Field(default_factory=Path.home, description="User home directory")
    config_root: Path | None = Field(
        default=None, description="Directory holding acm files (defaults to <home>/.claude)"
    )
    config_dir_name: str = Field(default=".claude", description="Directory name under home")
    profiles_file_name: str = Field(default=".claude_config", description="Profile list file name")
    active_file_name: str = Field(default=".claude_current", description="Active pointer file name")
    settings_file_name: str = Field(default="settings.json", description="Claude settings file name")
    log_level: str = Field(default="WARNING", description="Minimum log level")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Uppercase the log level and reject unknown names."""
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got: {value}")
        return level

    @property
    def root(self) -> Path:
        """Directory holding the profile list, pointer and settings file."""
        if self.config_root is not None:
            return self.config_root
        return self.home / self.config_dir_name

    @property
    def profiles_path(self) -> Path:
        return self.root / self.profiles_file_name

    @property
    def active_path(self) -> Path:
        return self.root / self.active_file_name

    @property
    def claude_settings_path(self) -> Path:
        return self.root / self.settings_file_name

    @classmethod
    def load(cls, **overrides: object) -> AcmSettings:
        """Build settings from the environment plus explicit overrides.

        ``None`` overrides are dropped so CLI options that were not given
        fall back to the environment and defaults.

        Raises:
            ConfigurationError: If any value fails validation
        """
        values = {key: value for key, value in overrides.items() if value is not None}
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid acm settings: {e}") from e
