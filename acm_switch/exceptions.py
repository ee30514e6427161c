"""Custom exception hierarchy for acm-switch.

Exception Hierarchy:
    AcmError (base)
    ├── ConfigurationError
    ├── ProfileError
    │   ├── DuplicateAliasError
    │   ├── UnknownAliasError
    │   ├── InvalidProfileError
    │   └── MalformedRecordError
    ├── CredentialKindError
    └── ActivationError
        ├── ActivePointerWriteError
        └── RecoverableActivationError
            ├── SettingsFileWriteError
            └── ShellConfigWriteError

ProfileStore and the credential kind resolver raise these to the caller and
never recover on their own. The activation engine recovers internally from
``RecoverableActivationError`` subclasses by moving on to the next surface;
only ``ActivePointerWriteError`` aborts an activation.

Example Usage:
    >>> from acm_switch.exceptions import UnknownAliasError
    >>> try:
    ...     store.remove("kimi")
    ... except UnknownAliasError as e:
    ...     print(e.message)
"""

from pathlib import Path


class AcmError(Exception):
    """Base exception for all acm-switch errors.

    Attributes:
        message: Human-readable error description
        suggestion: Optional hint shown to the user below the message
    """

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        """Initialize exception.

        Args:
            message: Error message
            suggestion: Optional suggestion for resolution
        """
        self.suggestion = suggestion

        full_message = message
        if suggestion:
            full_message = f"{message}\nSuggestion: {suggestion}"

        super().__init__(full_message)
        self.message = message


class ConfigurationError(AcmError):
    """Invalid acm-switch settings (bad log level, unusable paths)."""

    pass


class ProfileError(AcmError):
    """Base class for profile store errors.

    Attributes:
        alias: Alias the failing operation was about, when known
    """

    def __init__(
        self,
        message: str,
        alias: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        self.alias = alias
        super().__init__(message, suggestion=suggestion)


class DuplicateAliasError(ProfileError):
    """A profile with this alias is already stored."""

    pass


class UnknownAliasError(ProfileError):
    """No stored profile has this alias."""

    pass


class InvalidProfileError(ProfileError):
    """Profile fields cannot be represented in the record format.

    Raised for an empty alias, or any field containing the ``|`` delimiter
    or a line break.
    """

    pass


class MalformedRecordError(ProfileError):
    """A stored record line could not be parsed.

    Attributes:
        path: File the line was read from
        line_number: 1-based line number, or None for single-record files
    """

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        line_number: int | None = None,
    ) -> None:
        self.path = path
        self.line_number = line_number

        location = ""
        if path is not None:
            location = f" in {path}"
            if line_number is not None:
                location = f"{location}:{line_number}"

        super().__init__(
            f"{message}{location}",
            suggestion="Fix or delete the offending line, or re-add the profile",
        )


class CredentialKindError(AcmError):
    """Explicit credential kind override is not one of key, k, token, t."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(
            f"Unrecognized credential kind: {value!r}",
            suggestion="Use 'key' (or 'k') for API keys, 'token' (or 't') for auth tokens",
        )


class ActivationError(AcmError):
    """Base class for errors raised while activating a profile."""

    pass


class ActivePointerWriteError(ActivationError):
    """The active pointer file could not be written.

    This is fatal to ``activate``: the pointer is the record of what
    should be active.
    """

    pass


class RecoverableActivationError(ActivationError):
    """A persisted surface could not be updated; the next one is tried."""

    pass


class SettingsFileWriteError(RecoverableActivationError):
    """The Claude settings JSON file could not be read-merged or written."""

    pass


class ShellConfigWriteError(RecoverableActivationError):
    """The shell startup file or OS environment store could not be updated."""

    pass
