"""phonolo parse: tokenize transcriptions into inventory segments."""

from __future__ import annotations

import json
import sys

import click

from phonolo.cli.options import inventory_options
from phonolo.inventory.models import Inventory
from phonolo.transcription.tokenizer import TranscriptionError


@click.command()
@inventory_options
@click.argument("texts", nargs=-1, required=True)
@click.option(
    "--format", "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format. Default: text.",
)
def parse(inventory: Inventory, texts: tuple[str, ...], output_format: str) -> None:
    """Split each transcription TEXT into the inventory's segments.

    Exits with status 1 if any transcription does not parse.
    """
    results = []
    for text in texts:
        try:
            segments = inventory.parse(text)
        except TranscriptionError as exc:
            click.echo(f"Error: {exc}", err=True)
            sys.exit(1)
        results.append((text, [s.symbol for s in segments]))

    if output_format == "json":
        data = [{"text": text, "segments": symbols} for text, symbols in results]
        click.echo(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        for text, symbols in results:
            click.echo(f"{text}: {' '.join(symbols)}")
