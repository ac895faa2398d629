"""contactdb CLI entry point."""

import logging
import os

import click

LOG_LEVEL_ENV_VAR = "CONTACTDB_LOG_LEVEL"


def resolve_log_level(name: str) -> int:
    """Map a level name such as "debug" to its logging constant.

    Raises:
        ValueError: If the name is not a known logging level
    """
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level '{name}'")
    return level


@click.group()
def cli():
    """contactdb - contact database hooks CLI."""
    try:
        level = resolve_log_level(os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING"))
    except ValueError as e:
        click.echo(click.style(f"Invalid {LOG_LEVEL_ENV_VAR}: {e}", fg="red"), err=True)
        raise SystemExit(1)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Register subcommand groups
from contactdb.cli.config_cmd import config  # noqa: E402
from contactdb.cli.hooks_cmd import hooks  # noqa: E402

cli.add_command(config)
cli.add_command(hooks)
