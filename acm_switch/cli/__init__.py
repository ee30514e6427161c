"""CLI commands for acm-switch.

The CLI is built with Click. ``acm_switch.main`` defines the root ``acm``
group and registers the commands defined here.

Module Structure:
    - profiles.py: use, list, add, remove and current commands
"""

from acm_switch.cli.profiles import (
    add_profile,
    current_profile,
    list_profiles,
    remove_profile,
    use_profile,
)

__all__ = ["add_profile", "current_profile", "list_profiles", "remove_profile", "use_profile"]
