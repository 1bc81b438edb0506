"""IIT Calc CLI - Command-line interface for income tax withholding."""

import logging
import os

import click

from iitcalc import __version__

from .calc_commands import calc as calc_command
from .schemes_commands import schemes as schemes_group
from .settings_commands import settings as settings_group

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.WARNING),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)


@click.group()
@click.version_option(version=__version__, prog_name="iit-calc")
def cli():
    """IIT Calc - Individual income tax withholding calculator.

    Computes monthly withholding with the cumulative method and compares
    year-end bonus treatments.

    Configuration is loaded from (in order):

    \b
    1. IIT_CALC_CONFIG_PATH environment variable
    2. ~/.config/iit-calc/settings.json (XDG default)

    Run 'iit-calc settings show' to see effective settings.
    """
    pass


cli.add_command(calc_command)
cli.add_command(schemes_group)
cli.add_command(settings_group)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
