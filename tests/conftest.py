"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from acm_switch.activation import ActivationEngine
from acm_switch.config.settings import AcmSettings
from acm_switch.enums import CredentialKind
from acm_switch.profiles import ActivePointer, Profile, ProfileStore


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """Temporary home directory."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def settings(home_dir: Path) -> AcmSettings:
    """Settings rooted at the temporary home."""
    return AcmSettings(home=home_dir)


@pytest.fixture
def environ() -> dict[str, str]:
    """Stand-in for os.environ with a zsh user."""
    return {"SHELL": "/bin/zsh", "HOME": "/home/tester"}


@pytest.fixture
def store(settings: AcmSettings) -> ProfileStore:
    """ProfileStore on the temporary root."""
    return ProfileStore(settings)


@pytest.fixture
def pointer(settings: AcmSettings) -> ActivePointer:
    return ActivePointer(settings.active_path)


@pytest.fixture
def engine(settings: AcmSettings, environ: dict[str, str]) -> ActivationEngine:
    """ActivationEngine on a Linux host with a fake environment."""
    return ActivationEngine(settings, environ=environ, platform="linux")


@pytest.fixture
def token_profile() -> Profile:
    """Sample TOKEN-kind profile."""
    return Profile(
        alias="kimi",
        display_name="Moonshot",
        secret="sk-kimi-0123456789abcdef",
        base_url="https://api.moonshot.cn/anthropic",
        kind=CredentialKind.TOKEN,
    )


@pytest.fixture
def key_profile() -> Profile:
    """Sample KEY-kind profile."""
    return Profile(
        alias="mirror",
        display_name="Mirror",
        secret="sk-mirror-fedcba9876543210",
        base_url="https://api.aicodemirror.com/api/claudecode",
        kind=CredentialKind.KEY,
    )
