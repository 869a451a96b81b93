"""phonolo inventory: show a feature system or derived inventory."""

from __future__ import annotations

import json

import click

from phonolo.cli.options import inventory_options
from phonolo.inventory.models import Inventory


@click.command()
@inventory_options
@click.option(
    "--format", "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format. Default: text.",
)
def inventory(inventory: Inventory, output_format: str) -> None:
    """Show the segments and features of an inventory."""
    if output_format == "json":
        click.echo(json.dumps(inventory.to_dict(), ensure_ascii=False, indent=2))
        return

    kind = "Feature system" if inventory.is_root else "Derived inventory"
    click.echo(f"{kind}: {len(inventory)} segments")
    click.echo()
    click.echo(f"Segments ({len(inventory)}): {' '.join(inventory.symbols)}")
    click.echo(
        f"Features ({len(inventory.feature_names)}): "
        f"{', '.join(inventory.feature_names)}"
    )
