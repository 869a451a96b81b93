"""phonolo: phonological feature inventories, natural classes and transcription parsing."""

__version__ = "0.1.0"

from phonolo.inventory.models import Inventory, Segment
from phonolo.transcription.tokenizer import TranscriptionError, parse


def load_feature_system(name: str = "hayes") -> Inventory:
    """Load a bundled root feature system.

    Args:
        name: Name of the bundled system. Currently only 'hayes', a
            feature system after Bruce Hayes' Introductory Phonology.

    Returns:
        A frozen root Inventory.

    Raises:
        KeyError: If no bundled system has this name.
    """
    from phonolo.inventory.tables import load_bundled

    return load_bundled(name)


def derive_inventory(
    symbols: list[str],
    system: str | Inventory = "hayes",
    distinctive: bool = True,
) -> Inventory:
    """Derive a language inventory from a feature system.

    Args:
        symbols: Segment symbols the inventory should contain.
        system: A root Inventory, or the name of a bundled feature system.
        distinctive: Drop features that do not distinguish the selection.

    Raises:
        KeyError: If the system name or a symbol is unknown.
    """
    if isinstance(system, str):
        system = load_feature_system(system)
    return Inventory.from_feature_system(system, symbols, distinctive=distinctive)


__all__ = [
    "Inventory",
    "Segment",
    "TranscriptionError",
    "derive_inventory",
    "load_feature_system",
    "parse",
    "__version__",
]
