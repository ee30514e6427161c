"""Configuration for acm-switch.

Key Components:
    - AcmSettings: Root-path and logging settings, read from ``ACM_*``
      environment variables

Example:
    >>> from acm_switch.config import AcmSettings
    >>> settings = AcmSettings(home=Path("/tmp/sandbox"))
    >>> settings.profiles_path
    PosixPath('/tmp/sandbox/.claude/.claude_config')
"""

from acm_switch.config.settings import AcmSettings

__all__ = ["AcmSettings"]
