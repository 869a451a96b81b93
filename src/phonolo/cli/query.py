"""phonolo query / values: natural classes and feature values."""

from __future__ import annotations

import json

import click

from phonolo.cli.options import inventory_options
from phonolo.inventory.models import Inventory
from phonolo.notation.bundle import FeatureBundle


def _parse_constraints(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...]
) -> dict[str, str]:
    """Turn ('voice=+', 'nasal=-') into {'voice': '+', 'nasal': '-'}."""
    constraints: dict[str, str] = {}
    for item in value:
        feature, sep, val = item.partition("=")
        if not sep or not feature.strip() or not val.strip():
            raise click.BadParameter(
                f"expected FEATURE=VALUE, got {item!r}", ctx=ctx, param=param
            )
        constraints[feature.strip()] = val.strip()
    return constraints


@click.command()
@inventory_options
@click.argument("constraints", nargs=-1, callback=_parse_constraints)
@click.option(
    "--format", "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format. Default: text.",
)
def query(
    inventory: Inventory, constraints: dict[str, str], output_format: str
) -> None:
    """List the natural class matching FEATURE=VALUE constraints.

    Example: phonolo query syllabic=- voice=+ continuant=-
    """
    bundle = FeatureBundle(constraints)
    segments = bundle.natural_class(inventory)

    if output_format == "json":
        data = {
            "constraints": constraints,
            "segments": [s.symbol for s in segments],
            "total": len(segments),
        }
        click.echo(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        click.echo(f"Segments with {bundle.describe()} ({len(segments)}): "
                   f"{' '.join(s.symbol for s in segments)}")


@click.command()
@inventory_options
@click.argument("feature")
@click.option(
    "--format", "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format. Default: text.",
)
def values(inventory: Inventory, feature: str, output_format: str) -> None:
    """List the distinct values FEATURE takes in the inventory."""
    found = inventory.get_values(feature)

    if output_format == "json":
        click.echo(json.dumps({"feature": feature, "values": found}, ensure_ascii=False))
    elif found:
        click.echo(f"{feature}: {' '.join(found)}")
    else:
        click.echo(f"{feature}: no values in this inventory")
