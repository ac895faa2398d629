"""Configuration CLI commands."""

from pathlib import Path

import click

from contactdb.hidden_update import HiddenUpdateConfig
from contactdb.hooks import register_builtin_hooks


@click.group()
def config():
    """Configuration commands."""
    pass


@config.command()
@click.option(
    "--path",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file to validate (defaults to $CONTACTDB_CONFIG).",
)
def validate(config_path: Path | None):
    """Load configuration and resolve every hidden update function."""
    register_builtin_hooks()

    try:
        if config_path is not None:
            settings = HiddenUpdateConfig.from_yaml(config_path)
        else:
            settings = HiddenUpdateConfig.from_env()
        settings.resolve_functions()
    except ValueError as e:
        click.echo(click.style(f"Invalid configuration: {e}", fg="red"), err=True)
        raise SystemExit(1)

    click.echo(f"suppress_on_notice: {settings.suppress_on_notice}")
    click.echo(f"suppress_during_updates: {settings.suppress_during_updates}")
    click.echo(f"\n{len(settings.functions)} hidden update function(s):")
    for ref in settings.functions:
        click.echo(f"  ✓ {ref}")

    click.echo(click.style("\nConfiguration is valid.", fg="green", bold=True))
