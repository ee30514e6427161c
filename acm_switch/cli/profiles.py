"""CLI commands for profile management and activation.

Commands:
    - use: Activate a stored profile
    - list (ls): Show stored profiles
    - add: Store a new profile
    - remove (rm): Delete a profile
    - current: Show the active profile and whether this shell sees it

Every command reads its ``AcmSettings`` from ``ctx.obj["settings"]``. An
``environ`` mapping may also be placed in ``ctx.obj`` to stand in for
``os.environ``.

Example:
    Store and activate a profile::

        $ acm add kimi sk-xxx https://api.moonshot.cn/anthropic --name Moonshot
        $ acm use kimi
        $ acm current
"""

import sys
from typing import NoReturn

import click
import structlog

from acm_switch.activation import ActivationEngine, ActivationResult
from acm_switch.config.settings import AcmSettings
from acm_switch.credentials import resolve_credential_kind
from acm_switch.exceptions import AcmError
from acm_switch.profiles import ProfileStore

log = structlog.get_logger(__name__)

DEFAULT_DISPLAY_NAME = "Claude"

ALIAS_WIDTH = 20
NAME_WIDTH = 15
PREVIEW_WIDTH = 20


def _fail(error: AcmError) -> NoReturn:
    """Print an acm error and exit with status 1."""
    click.echo(click.style(f"Error: {error.message}", fg="red"), err=True)
    if error.suggestion:
        click.echo(click.style(f"Suggestion: {error.suggestion}", fg="yellow"), err=True)
    sys.exit(1)


def _fail_unexpected(error: Exception) -> NoReturn:
    """Log an unexpected failure and exit with status 1."""
    click.echo(click.style(f"Unexpected error: {error}", fg="red"), err=True)
    log.error("command_failed", exc_info=True)
    sys.exit(1)


def _settings(ctx: click.Context) -> AcmSettings:
    return ctx.obj["settings"]


def _open_store(ctx: click.Context) -> ProfileStore:
    """Build the profile store, announcing a freshly created profile list."""
    store = ProfileStore(_settings(ctx))
    if store.ensure_initialized():
        click.echo(f"Created profile file: {store.path}")
        click.echo("Add a profile with 'acm add <alias> <token> <url>'")
    return store


def _engine(ctx: click.Context) -> ActivationEngine:
    return ActivationEngine(_settings(ctx), environ=ctx.obj.get("environ"))


def _report_activation(result: ActivationResult) -> None:
    for failure in result.failures:
        click.echo(click.style(f"Warning: {failure}", fg="yellow"), err=True)

    update = result.surface
    if update is None:
        click.echo(click.style("Could not persist the profile; it is only set for this process", fg="yellow"))
        return

    if update.surface == "settings_file":
        click.echo(f"Updated Claude settings file: {update.target}")
    elif update.surface == "shell_profile":
        click.echo(f"Updated shell startup file: {update.target}")
        if update.hint:
            click.echo(f"Open a new terminal, or run `{update.hint}` to apply it here")
    elif update.surface == "os_environment":
        click.echo("Set user environment variables (takes effect in new terminals)")
    else:
        click.echo("Run these commands in the current terminal:")
        for command in update.commands:
            click.echo(f"    {command}")


@click.command(name="use")
@click.argument("alias")
@click.pass_context
def use_profile(ctx: click.Context, alias: str) -> None:
    """Switch to the profile ALIAS."""
    try:
        profile = _open_store(ctx).get(alias)
        result = _engine(ctx).activate(profile)
    except AcmError as e:
        _fail(e)
    except Exception as e:
        _fail_unexpected(e)

    _report_activation(result)
    click.echo(click.style(f"Switched to: {profile.alias}", fg="green"))
    click.echo(f"API URL: {profile.base_url}")
    click.echo(f"Secret: {profile.secret_preview}")


@click.command(name="list")
@click.pass_context
def list_profiles(ctx: click.Context) -> None:
    """Show all stored profiles."""
    try:
        profiles = _open_store(ctx).list_all()
    except AcmError as e:
        _fail(e)
    except Exception as e:
        _fail_unexpected(e)

    click.echo(click.style("Available profiles:", fg="cyan"))
    header = "Alias".ljust(ALIAS_WIDTH) + "Name".ljust(NAME_WIDTH) + "Secret".ljust(PREVIEW_WIDTH) + "API URL"
    click.echo(click.style(header, dim=True))
    click.echo(click.style("-" * 60, dim=True))

    for profile in profiles:
        click.echo(
            profile.alias.ljust(ALIAS_WIDTH)
            + profile.display_name.ljust(NAME_WIDTH)
            + profile.secret_preview.ljust(PREVIEW_WIDTH)
            + profile.base_url
        )


@click.command(name="add")
@click.argument("alias")
@click.argument("token")
@click.argument("url")
@click.argument("kind", required=False)
@click.option("--name", default=DEFAULT_DISPLAY_NAME, show_default=True, help="Display name")
@click.pass_context
def add_profile(ctx: click.Context, alias: str, token: str, url: str, kind: str | None, name: str) -> None:
    """Store a new profile.

    KIND is optional: key (k) or token (t). Without it the kind is looked up
    from known relay URLs, falling back to token.

    Examples:

        acm add kimi sk-xxx https://api.moonshot.cn/anthropic

        acm add mirror sk-yyy https://api.aicodemirror.com/api/claudecode key
    """
    try:
        credential_kind = resolve_credential_kind(url, kind)
        profile = _open_store(ctx).add(alias, name, token, url, credential_kind)
    except AcmError as e:
        _fail(e)
    except Exception as e:
        _fail_unexpected(e)

    click.echo(click.style(f"Added profile: {profile.display_name} ({profile.alias})", fg="green"))
    click.echo(f"Credential kind: {profile.kind} ({profile.env_var})")


@click.command(name="remove")
@click.argument("alias")
@click.pass_context
def remove_profile(ctx: click.Context, alias: str) -> None:
    """Delete the profile ALIAS."""
    try:
        result = _open_store(ctx).remove(alias)
    except AcmError as e:
        _fail(e)
    except Exception as e:
        _fail_unexpected(e)

    click.echo(click.style(f"Removed profile: {result.profile.display_name} ({alias})", fg="green"))
    if result.active_cleared:
        click.echo("Active profile cleared")


@click.command(name="current")
@click.pass_context
def current_profile(ctx: click.Context) -> None:
    """Show the active profile."""
    try:
        current = _engine(ctx).get_current()
    except AcmError as e:
        _fail(e)
    except Exception as e:
        _fail_unexpected(e)

    if current is None:
        click.echo(click.style("No active profile", fg="yellow"))
        click.echo("Run 'acm use <alias>' to activate one")
        return

    profile = current.profile
    click.echo(click.style("Current profile:", fg="cyan"))
    click.echo(f"Alias: {profile.alias}")
    click.echo(f"Name: {profile.display_name}")
    click.echo(f"Kind: {profile.kind}")
    click.echo(f"API URL: {profile.base_url}")
    click.echo(f"Secret: {profile.secret_preview}")

    if current.is_active:
        click.echo(click.style("Status: active", fg="green"))
    else:
        click.echo(click.style(f"Status: inactive (run 'acm use {profile.alias}' to activate)", fg="yellow"))
