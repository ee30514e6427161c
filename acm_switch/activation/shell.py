"""Host shell detection and startup-file editing.

Everything here is a pure function of its inputs except
``resolve_startup_file``, which checks whether ``~/.bash_profile`` exists.
Detection only looks at environment variables; it never runs a process.

Detection order:
    Windows: PSModulePath -> powershell, COMSPEC containing "cmd" -> cmd,
        otherwise powershell.
    Unix-like: SHELL containing "zsh" or "bash", then ZSH_VERSION/ZSH_NAME,
        then BASH_VERSION, otherwise unknown.

Startup files:
    zsh -> ~/.zshrc
    bash -> ~/.bash_profile if present, else ~/.bashrc
    powershell -> ~/Documents/WindowsPowerShell/Microsoft.PowerShell_profile.ps1
    cmd, or unknown on Windows -> None (use the OS environment store)
    unknown on Unix -> ~/.profile
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from acm_switch.enums import ShellKind
from acm_switch.profiles.models import Profile

BLOCK_START = "# Claude Code Environment Variables"
BLOCK_END = "# End Claude Code Environment Variables"

POWERSHELL_PROFILE = Path("Documents") / "WindowsPowerShell" / "Microsoft.PowerShell_profile.ps1"


def is_windows_platform(platform: str) -> bool:
    """Check a ``sys.platform`` value for the Windows family."""
    return platform.startswith("win")


def detect_shell(environ: Mapping[str, str], windows: bool) -> ShellKind:
    """Classify the user's shell from environment variables."""
    if windows:
        if environ.get("PSModulePath"):
            return ShellKind.POWERSHELL
        if "cmd" in environ.get("COMSPEC", "").lower():
            return ShellKind.CMD
        return ShellKind.POWERSHELL

    shell_path = environ.get("SHELL", "")
    if "zsh" in shell_path:
        return ShellKind.ZSH
    if "bash" in shell_path:
        return ShellKind.BASH

    if environ.get("ZSH_VERSION") or environ.get("ZSH_NAME"):
        return ShellKind.ZSH
    if environ.get("BASH_VERSION"):
        return ShellKind.BASH
    return ShellKind.UNKNOWN


def resolve_startup_file(shell: ShellKind, home: Path, windows: bool) -> Path | None:
    """Pick the startup file to edit, or None if the shell has none."""
    if windows:
        if shell == ShellKind.POWERSHELL:
            return home / POWERSHELL_PROFILE
        return None

    if shell == ShellKind.ZSH:
        return home / ".zshrc"
    if shell == ShellKind.BASH:
        bash_profile = home / ".bash_profile"
        if bash_profile.exists():
            return bash_profile
        return home / ".bashrc"
    return home / ".profile"


@dataclass(frozen=True)
class HostEnvironment:
    """What the activation engine knows about the machine it runs on."""

    shell: ShellKind
    windows: bool
    home: Path
    startup_file: Path | None

    @classmethod
    def detect(cls, environ: Mapping[str, str], platform: str, home: Path) -> HostEnvironment:
        windows = is_windows_platform(platform)
        shell = detect_shell(environ, windows)
        return cls(
            shell=shell,
            windows=windows,
            home=home,
            startup_file=resolve_startup_file(shell, home, windows),
        )


def _posix_quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$").replace("`", "\\`")
    return f'"{escaped}"'


def _powershell_quote(value: str) -> str:
    escaped = value.replace("`", "``").replace('"', '`"').replace("$", "`$")
    return f'"{escaped}"'


def render_assignments(profile: Profile, shell: ShellKind) -> list[str]:
    """Assignment statements for the base URL and the credential variable."""
    if shell == ShellKind.POWERSHELL:
        return [f"$env:{name} = {_powershell_quote(value)}" for name, value in profile.env_values().items()]
    return [f"export {name}={_posix_quote(value)}" for name, value in profile.env_values().items()]


def render_block(profile: Profile, shell: ShellKind) -> str:
    """Sentinel-delimited block for a startup file, without trailing newline."""
    return "\n".join([BLOCK_START, *render_assignments(profile, shell), BLOCK_END])


def upsert_block(content: str, block: str) -> str:
    """Replace the existing sentinel block in ``content``, or append ``block``.

    Text before and after an existing block is kept byte for byte. The block
    is the last end marker paired with the nearest start marker before it;
    unpaired markers are left alone.
    """
    end = content.rfind(BLOCK_END)
    start = content.rfind(BLOCK_START, 0, end) if end != -1 else -1

    if start != -1:
        return content[:start] + block + content[end + len(BLOCK_END) :]

    if content and not content.endswith("\n"):
        content += "\n"
    return f"{content}\n{block}\n"


def render_manual_commands(profile: Profile, windows: bool) -> list[str]:
    """Commands a user can paste into the current terminal."""
    if windows:
        return [f"set {name}={value}" for name, value in profile.env_values().items()]
    return [f"export {name}={_posix_quote(value)}" for name, value in profile.env_values().items()]


def source_hint(host: HostEnvironment, startup_file: Path) -> str | None:
    """``source`` command that reloads ``startup_file`` in bash or zsh."""
    if host.windows or host.shell not in (ShellKind.BASH, ShellKind.ZSH):
        return None
    return f'source "{startup_file}"'
