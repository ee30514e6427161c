"""Persisted surfaces tried in order by the activation engine.

Each strategy makes a profile's credential visible beyond the current
process. The engine runs them in sequence until one succeeds:

    1. SettingsFileStrategy     ~/.claude/settings.json
    2. ShellProfileStrategy     shell startup file sentinel block
    3. OsEnvironmentStrategy    ``setx`` on Windows without a startup file
    4. ManualCommandStrategy    commands for the user to run

A strategy that cannot run here reports ``available = False`` and is
skipped. A strategy that fails raises a ``RecoverableActivationError``.
"""

import subprocess  # nosec B404 # Only used to run setx with list arguments
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

import structlog

from acm_switch.activation.settings_file import ClaudeSettingsFile
from acm_switch.activation.shell import (
    HostEnvironment,
    render_block,
    render_manual_commands,
    source_hint,
    upsert_block,
)
from acm_switch.exceptions import ShellConfigWriteError
from acm_switch.profiles.models import Profile
from acm_switch.utils.fileio import read_text, write_text_atomic

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SurfaceUpdate:
    """What a successful strategy changed.

    Attributes:
        surface: Strategy name
        target: File that was written, if any
        hint: Follow-up command for the current terminal, if any
        commands: Commands the user must run (manual surface only)
    """

    surface: str
    target: Path | None = None
    hint: str | None = None
    commands: list[str] = field(default_factory=list)


class ActivationStrategy(Protocol):
    """Interface every persisted surface implements."""

    @property
    def name(self) -> str:
        """Surface identifier (e.g., 'settings_file')."""
        ...

    @property
    def available(self) -> bool:
        """Check if this surface can be used on the current host."""
        ...

    def apply(self, profile: Profile) -> SurfaceUpdate:
        """Persist ``profile`` on this surface.

        Raises:
            RecoverableActivationError: If the surface could not be updated
        """
        ...


class SettingsFileStrategy:
    """Write the credential into the Claude settings JSON file."""

    def __init__(self, path: Path) -> None:
        self.settings_file = ClaudeSettingsFile(path)

    @property
    def name(self) -> str:
        return "settings_file"

    @property
    def available(self) -> bool:
        return True

    def apply(self, profile: Profile) -> SurfaceUpdate:
        self.settings_file.apply(profile)
        return SurfaceUpdate(surface=self.name, target=self.settings_file.path)


class ShellProfileStrategy:
    """Insert or replace the sentinel block in the shell startup file."""

    def __init__(self, host: HostEnvironment) -> None:
        self.host = host

    @property
    def name(self) -> str:
        return "shell_profile"

    @property
    def available(self) -> bool:
        return self.host.startup_file is not None

    def apply(self, profile: Profile) -> SurfaceUpdate:
        startup_file = self.host.startup_file
        if startup_file is None:
            raise ShellConfigWriteError(f"No startup file for shell '{self.host.shell}'")

        try:
            content = read_text(startup_file) or ""
            updated = upsert_block(content, render_block(profile, self.host.shell))
            write_text_atomic(startup_file, updated)
        except (OSError, UnicodeDecodeError) as e:
            raise ShellConfigWriteError(f"Cannot update shell startup file {startup_file}: {e}") from e

        log.info("shell_profile_updated", path=str(startup_file), shell=str(self.host.shell), alias=profile.alias)
        return SurfaceUpdate(
            surface=self.name,
            target=startup_file,
            hint=source_hint(self.host, startup_file),
        )


class OsEnvironmentStrategy:
    """Persist user environment variables with ``setx`` on Windows."""

    def __init__(
        self,
        host: HostEnvironment,
        runner: Callable[..., Any] | None = None,
    ) -> None:
        self.host = host
        self.runner = runner or subprocess.run

    @property
    def name(self) -> str:
        return "os_environment"

    @property
    def available(self) -> bool:
        return self.host.windows and self.host.startup_file is None

    def apply(self, profile: Profile) -> SurfaceUpdate:
        for var_name, value in profile.env_values().items():
            try:
                self.runner(["setx", var_name, value], check=True, capture_output=True)  # nosec B603 B607
            except (OSError, subprocess.CalledProcessError) as e:
                raise ShellConfigWriteError(f"setx failed for {var_name}: {e}") from e
            log.debug("os_environment_variable_set", var_name=var_name)

        log.info("os_environment_updated", alias=profile.alias)
        return SurfaceUpdate(surface=self.name, hint="Restart the terminal to pick up the new variables")


class ManualCommandStrategy:
    """Last resort: hand the user the commands to run themselves."""

    def __init__(self, host: HostEnvironment) -> None:
        self.host = host

    @property
    def name(self) -> str:
        return "manual"

    @property
    def available(self) -> bool:
        return True

    def apply(self, profile: Profile) -> SurfaceUpdate:
        return SurfaceUpdate(
            surface=self.name,
            commands=render_manual_commands(profile, self.host.windows),
        )


def default_strategies(settings_path: Path, host: HostEnvironment) -> tuple[ActivationStrategy, ...]:
    """Surfaces in preference order for ``host``."""
    return (
        SettingsFileStrategy(settings_path),
        ShellProfileStrategy(host),
        OsEnvironmentStrategy(host),
        ManualCommandStrategy(host),
    )
