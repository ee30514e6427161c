"""CLI entry point for acm-switch."""

import sys
from pathlib import Path

import click

from acm_switch import __version__
from acm_switch.cli import (
    add_profile,
    current_profile,
    list_profiles,
    remove_profile,
    use_profile,
)
from acm_switch.config.settings import AcmSettings
from acm_switch.exceptions import ConfigurationError
from acm_switch.utils.logging_config import configure_logging


@click.group(invoke_without_command=True)
@click.option(
    "--home",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Home directory used to locate ~/.claude and shell startup files",
)
@click.option("--log-level", default=None, help="Logging level (default: WARNING)")
@click.version_option(__version__, prog_name="acm")
@click.pass_context
def cli(ctx: click.Context, home: Path | None, log_level: str | None) -> None:
    """ACM (Claude Code auth manager): switch between API credential profiles."""
    ctx.ensure_object(dict)

    if "settings" not in ctx.obj:
        try:
            ctx.obj["settings"] = AcmSettings.load(home=home, log_level=log_level)
        except ConfigurationError as e:
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(1)

    configure_logging(ctx.obj["settings"].log_level)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


@cli.command(name="help")
@click.pass_context
def help_command(ctx: click.Context) -> None:
    """Show this help and the file locations."""
    settings: AcmSettings = ctx.obj["settings"]
    parent = ctx.parent or ctx

    click.echo(parent.get_help())
    click.echo()
    click.echo("Files:")
    click.echo(f"  {settings.profiles_path}    profile list")
    click.echo(f"  {settings.active_path}    active profile")
    click.echo(f"  {settings.claude_settings_path}    Claude Code settings")


cli.add_command(use_profile)
cli.add_command(list_profiles)
cli.add_command(list_profiles, name="ls")
cli.add_command(add_profile)
cli.add_command(remove_profile)
cli.add_command(remove_profile, name="rm")
cli.add_command(current_profile)


if __name__ == "__main__":
    cli()
