"""Active pointer file: the snapshot of the currently selected profile.

The pointer is stored apart from the profile list so that "nothing active"
is simply a missing file, and so that it survives edits to the list. It may
name an alias that no longer exists in the store; readers must cope.
"""

from pathlib import Path

import structlog

from acm_switch.exceptions import ActivePointerWriteError
from acm_switch.profiles.models import Profile
from acm_switch.profiles.records import format_record, parse_record
from acm_switch.utils.fileio import read_text, write_text_atomic

log = structlog.get_logger(__name__)


class ActivePointer:
    """Read, write and clear the single-record active pointer file.

    Example:
        >>> pointer = ActivePointer(settings.active_path)
        >>> pointer.write(profile)
        >>> pointer.read().alias
        'kimi'
        >>> pointer.clear()
        True
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def read(self) -> Profile | None:
        """Return the stored snapshot, or None if nothing is active.

        Raises:
            MalformedRecordError: If the file holds an unparseable record
        """
        content = read_text(self.path)
        if content is None or not content.strip():
            return None
        return parse_record(content.strip("\r\n"), path=self.path)

    def write(self, profile: Profile) -> None:
        """Overwrite the pointer with a snapshot of ``profile``.

        Raises:
            ActivePointerWriteError: If the file cannot be written
        """
        try:
            write_text_atomic(self.path, format_record(profile))
        except OSError as e:
            raise ActivePointerWriteError(
                f"Cannot write active profile file {self.path}: {e}",
                suggestion=f"Check permissions on {self.path.parent}",
            ) from e

        log.info("active_pointer_written", alias=profile.alias, path=str(self.path))

    def clear(self) -> bool:
        """Delete the pointer file.

        Returns:
            True if a pointer was deleted, False if none existed
        """
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False

        log.info("active_pointer_cleared", path=str(self.path))
        return True
