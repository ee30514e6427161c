"""Codec for the pipe-delimited profile record format.

One record per line, fields in fixed order::

    alias|display_name|secret|base_url|kind

The trailing ``kind`` field is optional; records written before it existed
have four fields and are read as TOKEN. Raw lines never leave this module:
callers get ``Profile`` objects.
"""

from pathlib import Path

from acm_switch.enums import CredentialKind
from acm_switch.exceptions import InvalidProfileError, MalformedRecordError
from acm_switch.profiles.models import Profile

DELIMITER = "|"
LEGACY_FIELD_COUNT = 4
FIELD_COUNT = 5


def validate_profile(profile: Profile) -> None:
    """Check that every field survives a round trip through the format.

    Raises:
        InvalidProfileError: If the alias is empty or any field contains
            the delimiter or a line break
    """
    if not profile.alias.strip():
        raise InvalidProfileError("Profile alias cannot be empty")

    fields = {
        "alias": profile.alias,
        "display name": profile.display_name,
        "secret": profile.secret,
        "base URL": profile.base_url,
    }
    for label, value in fields.items():
        if DELIMITER in value:
            raise InvalidProfileError(
                f"Profile {label} cannot contain '{DELIMITER}'",
                alias=profile.alias,
            )
        if "\n" in value or "\r" in value:
            raise InvalidProfileError(
                f"Profile {label} cannot contain line breaks",
                alias=profile.alias,
            )


def format_record(profile: Profile) -> str:
    """Serialize a profile to a single record line (no newline)."""
    return DELIMITER.join(
        [
            profile.alias,
            profile.display_name,
            profile.secret,
            profile.base_url,
            profile.kind.value,
        ]
    )


def parse_record(
    line: str,
    path: Path | None = None,
    line_number: int | None = None,
) -> Profile:
    """Parse one record line.

    Args:
        line: Record text, with or without its line ending
        path: Source file, used in error messages
        line_number: 1-based line number, used in error messages

    Raises:
        MalformedRecordError: If the field count is not 4 or 5, the alias is
            empty, or the kind field is not KEY/TOKEN
    """
    parts = line.rstrip("\r\n").split(DELIMITER)

    if len(parts) not in (LEGACY_FIELD_COUNT, FIELD_COUNT):
        raise MalformedRecordError(
            f"Expected {LEGACY_FIELD_COUNT} or {FIELD_COUNT} fields, found {len(parts)}",
            path=path,
            line_number=line_number,
        )

    alias, display_name, secret, base_url = parts[:LEGACY_FIELD_COUNT]
    if not alias:
        raise MalformedRecordError("Record has an empty alias", path=path, line_number=line_number)

    raw_kind = parts[4] if len(parts) == FIELD_COUNT else ""
    if not raw_kind:
        kind = CredentialKind.TOKEN
    else:
        try:
            kind = CredentialKind(raw_kind.upper())
        except ValueError:
            raise MalformedRecordError(
                f"Unknown credential kind {raw_kind!r}",
                path=path,
                line_number=line_number,
            ) from None

    return Profile(
        alias=alias,
        display_name=display_name,
        secret=secret,
        base_url=base_url,
        kind=kind,
    )


def parse_records(content: str, path: Path | None = None) -> list[Profile]:
    """Parse every non-blank line of a profile list, in file order."""
    profiles = []
    for line_number, line in enumerate(content.split("\n"), start=1):
        if not line.strip():
            continue
        profiles.append(parse_record(line, path=path, line_number=line_number))
    return profiles
