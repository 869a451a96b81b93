"""Feature inventories: segments, natural-class index and feature tables."""

from phonolo.inventory.models import (
    CONSONANT,
    NULL,
    VOWEL,
    WORD_BOUNDARY,
    ChartMetadata,
    Inventory,
    Segment,
)
from phonolo.inventory.tables import bundled_systems, load_bundled, load_inventory, load_table

__all__ = [
    "CONSONANT",
    "ChartMetadata",
    "Inventory",
    "NULL",
    "Segment",
    "VOWEL",
    "WORD_BOUNDARY",
    "bundled_systems",
    "load_bundled",
    "load_inventory",
    "load_table",
]
