"""Activation: propagate the active profile into the host environment.

Key Components:
    - ActivationEngine: Writes the active pointer, runs the surface chain,
      updates the process environment
    - ActivationStrategy: Protocol for persisted surfaces
    - HostEnvironment: Detected shell, OS family and startup file
"""

from acm_switch.activation.engine import ActivationEngine, ActivationResult
from acm_switch.activation.shell import HostEnvironment, detect_shell
from acm_switch.activation.strategies import (
    ActivationStrategy,
    ManualCommandStrategy,
    OsEnvironmentStrategy,
    SettingsFileStrategy,
    ShellProfileStrategy,
    SurfaceUpdate,
)

__all__ = [
    "ActivationEngine",
    "ActivationResult",
    "ActivationStrategy",
    "HostEnvironment",
    "ManualCommandStrategy",
    "OsEnvironmentStrategy",
    "SettingsFileStrategy",
    "ShellProfileStrategy",
    "SurfaceUpdate",
    "detect_shell",
]
