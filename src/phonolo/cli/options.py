"""Shared options for commands that operate on an inventory."""

from __future__ import annotations

import functools
import re
import sys
from typing import Any, Callable

import click

from phonolo.inventory.models import Inventory
from phonolo.inventory.tables import bundled_systems, load_bundled, load_inventory


_SYMBOL_SEP = re.compile(r"[,\s]+")


def split_symbols(raw: str) -> list[str]:
    """Split a '--segments' value on commas and whitespace."""
    return [s for s in _SYMBOL_SEP.split(raw) if s]


def inventory_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add --system/--table/--segments/--distinctive and pass ``inventory``."""

    @click.option(
        "--system",
        default="hayes",
        show_default=True,
        help=f"Bundled feature system ({', '.join(bundled_systems())}).",
    )
    @click.option(
        "--table", "-t",
        "table_path",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        help="Feature table file (.json, .csv, .tsv). Overrides --system.",
    )
    @click.option(
        "--segments", "-s",
        default=None,
        help="Restrict to these segments (space- or comma-separated), e.g. 'p t k a i u'.",
    )
    @click.option(
        "--distinctive/--no-distinctive",
        default=True,
        show_default=True,
        help="With --segments, keep only features that distinguish the segments.",
    )
    @functools.wraps(func)
    def wrapper(
        system: str,
        table_path: str | None,
        segments: str | None,
        distinctive: bool,
        **kwargs: Any,
    ) -> Any:
        inventory = resolve_inventory(system, table_path, segments, distinctive)
        return func(inventory=inventory, **kwargs)

    return wrapper


def resolve_inventory(
    system: str,
    table_path: str | None,
    segments: str | None,
    distinctive: bool,
) -> Inventory:
    """Load the feature system and optionally derive a sub-inventory.

    Exits with status 1 on an unknown system, unknown segment or
    unreadable table.
    """
    try:
        if table_path is not None:
            inv = load_inventory(table_path)
        else:
            inv = load_bundled(system)
        if segments:
            inv = Inventory.from_feature_system(
                inv, split_symbols(segments), distinctive=distinctive
            )
    except KeyError as exc:
        click.echo(f"Error: {exc.args[0] if exc.args else exc}", err=True)
        sys.exit(1)
    except (ValueError, OSError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    return inv
