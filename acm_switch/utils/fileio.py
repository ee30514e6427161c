"""Atomic text file writes shared by every on-disk surface."""

import os
from pathlib import Path

import structlog

log = structlog.get_logger(__name__)


def write_text_atomic(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` via a temporary file and rename.

    The temporary file lives next to the target so the rename stays on one
    filesystem. Parent directories are created if missing. There is no
    locking; concurrent writers race and the last rename wins.

    Raises:
        OSError: If the directory, temp file or rename fails
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f"{path.name}.tmp")

    try:
        with open(tmp_path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise

    log.debug("file_written", path=str(path), size=len(content))


def read_text(path: Path) -> str | None:
    """Read a UTF-8 text file, or return None if it does not exist."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
