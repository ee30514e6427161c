"""Profile storage: domain models, record codec, store and active pointer.

Key Components:
    - Profile: A named credential configuration
    - ProfileStore: CRUD over the profile list file
    - ActivePointer: Snapshot file naming the active profile
"""

from acm_switch.profiles.models import CurrentProfile, Profile, RemovalResult
from acm_switch.profiles.pointer import ActivePointer
from acm_switch.profiles.store import ProfileStore

__all__ = [
    "ActivePointer",
    "CurrentProfile",
    "Profile",
    "ProfileStore",
    "RemovalResult",
]
