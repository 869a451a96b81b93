"""Feature table loading: bundled feature systems and user table files.

Reads raw feature tables from JSON (an object mapping each symbol to its
feature specification) or from CSV/TSV (one row per segment with a
``symbol`` column, an optional ``name`` column and one column per
feature), and builds root Inventories from them.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path

from phonolo.inventory.models import Inventory


logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent.parent / "data"

_BUNDLED_SYSTEMS: dict[str, str] = {
    "hayes": "hayes.csv",
}
"""Bundled feature systems: name → file under ``phonolo/data``."""

_RESERVED_COLUMNS = ("symbol", "name")


def bundled_systems() -> list[str]:
    """List the names of the bundled feature systems."""
    return sorted(_BUNDLED_SYSTEMS)


def load_table(
    path: Path | str,
) -> tuple[dict[str, dict[str, str]], dict[str, str]]:
    """Read a feature table file.

    The format is chosen by suffix: ``.json``, ``.csv`` or ``.tsv``.

    Args:
        path: Path to the table file.

    Returns:
        ``(table, names)``: the raw feature table, and a mapping of
        symbol to segment name for rows that have one.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the suffix is unsupported or the contents malformed.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        table, names = _read_json(path)
    elif suffix in (".csv", ".tsv"):
        table, names = _read_delimited(path, "\t" if suffix == ".tsv" else ",")
    else:
        raise ValueError(
            f"Unsupported feature table format: {path.name!r}. "
            f"Use a .json, .csv or .tsv file."
        )

    logger.info("Loaded feature table %s: %d segments", path, len(table))
    return table, names


def load_inventory(path: Path | str) -> Inventory:
    """Read a feature table file into a root feature system.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is malformed.
    """
    table, names = load_table(path)
    return Inventory.from_table(table, names=names)


def load_bundled(name: str = "hayes") -> Inventory:
    """Load a bundled feature system by name.

    Args:
        name: One of ``bundled_systems()``. Case-insensitive.

    Raises:
        KeyError: If no bundled system has this name.
    """
    key = name.lower()
    if key not in _BUNDLED_SYSTEMS:
        raise KeyError(
            f"Unknown feature system: {name!r}. "
            f"Available: {', '.join(bundled_systems())}"
        )
    return load_inventory(_DATA_DIR / _BUNDLED_SYSTEMS[key])


# ---------------------------------------------------------------------------
# Internal readers
# ---------------------------------------------------------------------------


def _read_json(path: Path) -> tuple[dict[str, dict[str, str]], dict[str, str]]:
    """Read a JSON object of {symbol: {feature: value}}."""
    with open(path, "r", encoding="utf-8-sig") as f:
        raw = json.load(f)

    if not isinstance(raw, dict):
        raise ValueError(
            f"{path.name}: expected a JSON object of segment feature "
            f"specifications, got {type(raw).__name__}"
        )
    return raw, {}


def _read_delimited(
    path: Path, delimiter: str
) -> tuple[dict[str, dict[str, str]], dict[str, str]]:
    """Read a CSV/TSV table with one row per segment.

    Empty feature cells are treated as unspecified and omitted. A
    leading byte order mark, as written by spreadsheet exports, is ignored.
    """
    table: dict[str, dict[str, str]] = {}
    names: dict[str, str] = {}

    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f, delimiter=delimiter)
        if reader.fieldnames is None or "symbol" not in reader.fieldnames:
            raise ValueError(f"{path.name}: missing required 'symbol' column")

        features = [c for c in reader.fieldnames if c not in _RESERVED_COLUMNS]

        for line, row in enumerate(reader, start=2):
            symbol = (row.get("symbol") or "").strip()
            if not symbol:
                raise ValueError(f"{path.name}, line {line}: empty symbol")
            if None in row:
                raise ValueError(
                    f"{path.name}, line {line}: more cells than header columns"
                )

            spec = {}
            for feature in features:
                value = (row.get(feature) or "").strip()
                if value:
                    spec[feature] = value
            table[symbol] = spec

            name = (row.get("name") or "").strip()
            if name:
                names[symbol] = name

    return table, names
