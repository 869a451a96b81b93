"""Command-line interface for phonolo."""

import click

from phonolo.cli.inventory import inventory
from phonolo.cli.parse import parse
from phonolo.cli.query import query, values
from phonolo.utils.logging_setup import setup_logging


@click.group()
@click.version_option(package_name="phonolo")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Logging verbosity. Default: WARNING.",
)
def main(log_level: str) -> None:
    """phonolo: Feature inventories, natural classes and transcription parsing."""
    setup_logging(log_level)


main.add_command(inventory)
main.add_command(query)
main.add_command(values)
main.add_command(parse)
