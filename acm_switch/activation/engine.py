"""
Activation engine: make one profile the active one.

``activate`` runs three steps:

    1. Write the active pointer snapshot. Failure aborts the activation
       with ``ActivePointerWriteError``.
    2. Try the persisted surfaces in order (settings file, shell startup
       file, OS environment store, manual commands) until one succeeds.
       Failures here are logged and recorded, never raised.
    3. Update the in-process environment, whatever happened in step 2.

``get_current`` reads the pointer back and reports whether this process's
environment still carries its credential. That is a liveness check for
this process only; other shells may differ.

Example:
    >>> engine = ActivationEngine(settings)
    >>> result = engine.activate(store.get("kimi"))
    >>> result.surface.surface
    'settings_file'
    >>> engine.get_current().is_active
    True
"""

import os
import sys
from collections.abc import MutableMapping, Sequence
from dataclasses import dataclass, field

import structlog

from acm_switch.activation.environment import ProcessEnvironment
from acm_switch.activation.shell import HostEnvironment
from acm_switch.activation.strategies import ActivationStrategy, SurfaceUpdate, default_strategies
from acm_switch.config.settings import AcmSettings
from acm_switch.exceptions import RecoverableActivationError
from acm_switch.profiles.models import CurrentProfile, Profile
from acm_switch.profiles.pointer import ActivePointer

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ActivationResult:
    """Outcome of an activation.

    Attributes:
        profile: Profile that was activated
        surface: Persisted surface that succeeded, or None if all failed
        failures: Messages from surfaces that were tried and failed
    """

    profile: Profile
    surface: SurfaceUpdate | None
    failures: list[str] = field(default_factory=list)


class ActivationEngine:
    """Owns the active pointer and propagates it to the host environment.

    Attributes:
        pointer: Active pointer file
        host: Detected shell and OS family
        environment: In-process environment surface
        strategies: Persisted surfaces in preference order
    """

    def __init__(
        self,
        settings: AcmSettings,
        environ: MutableMapping[str, str] | None = None,
        platform: str | None = None,
        strategies: Sequence[ActivationStrategy] | None = None,
        pointer: ActivePointer | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            settings: Source of every file path
            environ: Environment to inspect and update (default ``os.environ``)
            platform: ``sys.platform`` value used for OS detection
            strategies: Custom surfaces replacing the default chain
            pointer: Custom active pointer (default from ``settings``)
        """
        self.environment = ProcessEnvironment(os.environ if environ is None else environ)
        self.pointer = pointer or ActivePointer(settings.active_path)
        self.host = HostEnvironment.detect(
            self.environment.environ,
            platform or sys.platform,
            settings.home,
        )
        if strategies is None:
            strategies = default_strategies(settings.claude_settings_path, self.host)
        self.strategies: tuple[ActivationStrategy, ...] = tuple(strategies)

    def activate(self, profile: Profile) -> ActivationResult:
        """Make ``profile`` the active profile.

        Raises:
            ActivePointerWriteError: If the pointer file cannot be written;
                nothing else is touched in that case
        """
        self.pointer.write(profile)

        surface, failures = self._apply_surfaces(profile)
        self.environment.apply_profile(profile)

        log.info(
            "profile_activated",
            alias=profile.alias,
            kind=profile.kind.value,
            surface=surface.surface if surface else None,
            failures=len(failures),
        )
        return ActivationResult(profile=profile, surface=surface, failures=failures)

    def _apply_surfaces(self, profile: Profile) -> tuple[SurfaceUpdate | None, list[str]]:
        failures: list[str] = []

        for strategy in self.strategies:
            if not strategy.available:
                log.debug("activation_surface_skipped", surface=strategy.name)
                continue

            try:
                return strategy.apply(profile), failures
            except RecoverableActivationError as e:
                log.warning("activation_surface_failed", surface=strategy.name, error=e.message)
                failures.append(e.message)

        return None, failures

    def get_current(self) -> CurrentProfile | None:
        """Return the active snapshot with its liveness, or None.

        Raises:
            MalformedRecordError: If the pointer file cannot be parsed
        """
        profile = self.pointer.read()
        if profile is None:
            return None

        return CurrentProfile(
            profile=profile,
            is_active=profile.matches_environment(self.environment.environ),
        )
