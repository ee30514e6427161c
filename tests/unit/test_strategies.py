"""Tests for acm_switch/activation/strategies.py - persisted surfaces."""

import subprocess
from unittest.mock import Mock, call, patch

import pytest

from acm_switch.activation.shell import BLOCK_START, HostEnvironment
from acm_switch.activation.strategies import (
    ManualCommandStrategy,
    OsEnvironmentStrategy,
    SettingsFileStrategy,
    ShellProfileStrategy,
    default_strategies,
)
from acm_switch.enums import ShellKind
from acm_switch.exceptions import ShellConfigWriteError


@pytest.fixture
def zsh_host(tmp_path):
    return HostEnvironment(shell=ShellKind.ZSH, windows=False, home=tmp_path, startup_file=tmp_path / ".zshrc")


@pytest.fixture
def cmd_host(tmp_path):
    return HostEnvironment(shell=ShellKind.CMD, windows=True, home=tmp_path, startup_file=None)


class TestSettingsFileStrategy:
    def test_apply_reports_target(self, tmp_path, token_profile):
        path = tmp_path / "settings.json"

        update = SettingsFileStrategy(path).apply(token_profile)

        assert update.surface == "settings_file"
        assert update.target == path
        assert path.exists()


class TestShellProfileStrategy:
    def test_available_only_with_startup_file(self, zsh_host, cmd_host):
        assert ShellProfileStrategy(zsh_host).available is True
        assert ShellProfileStrategy(cmd_host).available is False

    def test_apply_writes_block_and_hint(self, zsh_host, token_profile):
        update = ShellProfileStrategy(zsh_host).apply(token_profile)

        content = zsh_host.startup_file.read_text()
        assert update.surface == "shell_profile"
        assert update.target == zsh_host.startup_file
        assert update.hint == f'source "{zsh_host.startup_file}"'
        assert 'export ANTHROPIC_AUTH_TOKEN="sk-kimi-0123456789abcdef"' in content

    def test_apply_twice_keeps_one_block(self, zsh_host, token_profile, key_profile):
        zsh_host.startup_file.write_text("export EDITOR=vim\n")
        strategy = ShellProfileStrategy(zsh_host)

        strategy.apply(token_profile)
        strategy.apply(key_profile)

        content = zsh_host.startup_file.read_text()
        assert content.count(BLOCK_START) == 1
        assert content.startswith("export EDITOR=vim\n")
        assert key_profile.secret in content
        assert token_profile.secret not in content

    def test_powershell_profile_directory_is_created(self, tmp_path, key_profile):
        startup = tmp_path / "Documents" / "WindowsPowerShell" / "Microsoft.PowerShell_profile.ps1"
        host = HostEnvironment(shell=ShellKind.POWERSHELL, windows=True, home=tmp_path, startup_file=startup)

        update = ShellProfileStrategy(host).apply(key_profile)

        assert update.hint is None
        assert '$env:ANTHROPIC_API_KEY = "sk-mirror-fedcba9876543210"' in startup.read_text()

    def test_write_failure_raises(self, tmp_path, token_profile):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        host = HostEnvironment(shell=ShellKind.BASH, windows=False, home=tmp_path, startup_file=blocker / ".bashrc")

        with pytest.raises(ShellConfigWriteError):
            ShellProfileStrategy(host).apply(token_profile)

    def test_undecodable_startup_file_raises(self, zsh_host, token_profile):
        zsh_host.startup_file.write_bytes(b"# caf\xe9 latte\nexport PATH=/opt/bin\n")

        with pytest.raises(ShellConfigWriteError, match="Cannot update shell startup file"):
            ShellProfileStrategy(zsh_host).apply(token_profile)

        assert zsh_host.startup_file.read_bytes() == b"# caf\xe9 latte\nexport PATH=/opt/bin\n"

    def test_apply_without_startup_file_raises(self, cmd_host, token_profile):
        with pytest.raises(ShellConfigWriteError):
            ShellProfileStrategy(cmd_host).apply(token_profile)


class TestOsEnvironmentStrategy:
    def test_available_on_windows_without_startup_file(self, cmd_host, zsh_host, tmp_path):
        powershell = HostEnvironment(
            shell=ShellKind.POWERSHELL, windows=True, home=tmp_path, startup_file=tmp_path / "profile.ps1"
        )

        assert OsEnvironmentStrategy(cmd_host).available is True
        assert OsEnvironmentStrategy(zsh_host).available is False
        assert OsEnvironmentStrategy(powershell).available is False

    def test_apply_runs_setx(self, cmd_host, key_profile):
        runner = Mock()

        update = OsEnvironmentStrategy(cmd_host, runner=runner).apply(key_profile)

        assert update.surface == "os_environment"
        assert runner.call_args_list == [
            call(
                ["setx", "ANTHROPIC_BASE_URL", "https://api.aicodemirror.com/api/claudecode"],
                check=True,
                capture_output=True,
            ),
            call(
                ["setx", "ANTHROPIC_API_KEY", "sk-mirror-fedcba9876543210"],
                check=True,
                capture_output=True,
            ),
        ]

    def test_defaults_to_subprocess_run(self, cmd_host, token_profile):
        with patch("acm_switch.activation.strategies.subprocess.run") as mock_run:
            OsEnvironmentStrategy(cmd_host).apply(token_profile)

        assert mock_run.call_count == 2

    @pytest.mark.parametrize(
        "error",
        [
            subprocess.CalledProcessError(1, "setx"),
            FileNotFoundError("setx"),
        ],
    )
    def test_setx_failure_raises(self, cmd_host, token_profile, error):
        runner = Mock(side_effect=error)

        with pytest.raises(ShellConfigWriteError) as exc_info:
            OsEnvironmentStrategy(cmd_host, runner=runner).apply(token_profile)

        assert "ANTHROPIC_BASE_URL" in exc_info.value.message


class TestManualCommandStrategy:
    def test_unix_commands(self, zsh_host, token_profile):
        update = ManualCommandStrategy(zsh_host).apply(token_profile)

        assert update.surface == "manual"
        assert update.commands == [
            'export ANTHROPIC_BASE_URL="https://api.moonshot.cn/anthropic"',
            'export ANTHROPIC_AUTH_TOKEN="sk-kimi-0123456789abcdef"',
        ]

    def test_windows_commands(self, cmd_host, token_profile):
        update = ManualCommandStrategy(cmd_host).apply(token_profile)

        assert update.commands[0] == "set ANTHROPIC_BASE_URL=https://api.moonshot.cn/anthropic"


def test_default_strategy_order(tmp_path, zsh_host):
    names = [s.name for s in default_strategies(tmp_path / "settings.json", zsh_host)]

    assert names == ["settings_file", "shell_profile", "os_environment", "manual"]
