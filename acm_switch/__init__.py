"""acm-switch: switch Claude Code between named API credential profiles."""

__version__ = "1.0.0"
