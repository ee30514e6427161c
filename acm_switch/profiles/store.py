"""
Profile store backed by the pipe-delimited profile list file.

The store is plain record CRUD with no knowledge of the host environment.
The one exception is ``remove``, which also clears the active pointer when
it names the removed alias so that a removed profile never reads back as
the current one.

Concurrency Model:
    None. Each call reads the whole file and writes it back (or appends).
    Two processes adding or removing at the same time race, and the last
    writer wins.

Example:
    >>> store = ProfileStore(AcmSettings())
    >>> store.add("kimi", "Moonshot", "sk-xxx", "https://api.moonshot.cn/anthropic")
    >>> [p.alias for p in store.list_all()]
    ['kimi']
    >>> store.remove("kimi").active_cleared
    False
"""

from pathlib import Path

import structlog

from acm_switch.config.settings import AcmSettings
from acm_switch.enums import CredentialKind
from acm_switch.exceptions import (
    DuplicateAliasError,
    MalformedRecordError,
    UnknownAliasError,
)
from acm_switch.profiles.models import Profile, RemovalResult
from acm_switch.profiles.pointer import ActivePointer
from acm_switch.profiles.records import format_record, parse_records, validate_profile
from acm_switch.utils.fileio import read_text, write_text_atomic

log = structlog.get_logger(__name__)


class ProfileStore:
    """Ordered, alias-keyed list of credential profiles.

    Attributes:
        path: Profile list file
        pointer: Active pointer consulted by ``remove``
    """

    def __init__(self, settings: AcmSettings, pointer: ActivePointer | None = None) -> None:
        self.path: Path = settings.profiles_path
        self.pointer = pointer or ActivePointer(settings.active_path)

    def ensure_initialized(self) -> bool:
        """Create an empty profile list if none exists.

        Never touches an existing file.

        Returns:
            True if the file was created by this call
        """
        if self.path.exists():
            return False

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch()
        log.info("profile_store_created", path=str(self.path))
        return True

    def _read(self) -> str:
        self.ensure_initialized()
        return read_text(self.path) or ""

    def list_all(self) -> list[Profile]:
        """Return every stored profile in file order.

        Raises:
            MalformedRecordError: If any non-blank line cannot be parsed
        """
        return parse_records(self._read(), path=self.path)

    def find(self, alias: str) -> Profile | None:
        for profile in self.list_all():
            if profile.alias == alias:
                return profile
        return None

    def get(self, alias: str) -> Profile:
        """Return the profile for ``alias``.

        Raises:
            UnknownAliasError: If no profile has this alias
        """
        profile = self.find(alias)
        if profile is None:
            raise UnknownAliasError(
                f"Profile '{alias}' not found",
                alias=alias,
                suggestion="Run 'acm list' to see available profiles",
            )
        return profile

    def add(
        self,
        alias: str,
        display_name: str,
        secret: str,
        base_url: str,
        kind: CredentialKind = CredentialKind.TOKEN,
    ) -> Profile:
        """Append a new profile.

        Raises:
            InvalidProfileError: If a field cannot be stored
            DuplicateAliasError: If ``alias`` already exists; the file is
                left unchanged
        """
        profile = Profile(
            alias=alias,
            display_name=display_name,
            secret=secret,
            base_url=base_url,
            kind=kind,
        )
        validate_profile(profile)

        content = self._read()
        existing = parse_records(content, path=self.path)
        if any(p.alias == alias for p in existing):
            raise DuplicateAliasError(
                f"Profile alias '{alias}' already exists",
                alias=alias,
                suggestion=f"Remove it first with 'acm remove {alias}' or pick another alias",
            )

        separator = "\n" if content and not content.endswith("\n") else ""
        with open(self.path, "a", encoding="utf-8", newline="") as f:
            f.write(f"{separator}{format_record(profile)}\n")

        log.info("profile_added", alias=alias, kind=kind.value, base_url=base_url)
        return profile

    def remove(self, alias: str) -> RemovalResult:
        """Remove a profile and clear the active pointer if it names it.

        The remaining records are rewritten in their original order.

        Raises:
            UnknownAliasError: If no profile has this alias
        """
        profiles = self.list_all()
        removed = next((p for p in profiles if p.alias == alias), None)
        if removed is None:
            raise UnknownAliasError(
                f"Profile '{alias}' not found",
                alias=alias,
                suggestion="Run 'acm list' to see available profiles",
            )

        remaining = [p for p in profiles if p.alias != alias]
        content = "".join(f"{format_record(p)}\n" for p in remaining)
        write_text_atomic(self.path, content)
        log.info("profile_removed", alias=alias, remaining=len(remaining))

        return RemovalResult(profile=removed, active_cleared=self._clear_pointer_for(alias))

    def _clear_pointer_for(self, alias: str) -> bool:
        try:
            current = self.pointer.read()
        except MalformedRecordError as e:
            log.warning("active_pointer_unreadable", path=str(self.pointer.path), error=e.message)
            return False

        if current is None or current.alias != alias:
            return False
        return self.pointer.clear()
