"""Shared test fixtures for phonolo."""

import pytest

from phonolo import load_feature_system
from phonolo.inventory.models import Inventory


ENGLISH_SYMBOLS = [
    "p", "t", "k", "b", "d", "ɡ", "t͡ʃ", "d͡ʒ",     # stops, affricates
    "f", "θ", "s", "ʃ", "h", "v", "ð", "z", "ʒ",    # fricatives
    "m", "n", "ŋ",                                  # nasals
    "ɹ", "j", "l", "w",                             # approximants
    "i", "u", "ɪ", "ʊ", "e", "o", "ɛ",              # vowels
    "ə", "ʌ", "ɔ", "æ", "ɑ", "a",
    "ɾ",                                            # flap allophone
]

JAPANESE_SYMBOLS = [
    "a", "i", "ɯ", "e", "o",
    "p", "b", "t", "d", "k", "ɡ", "t͡s", "t͡ɕ", "d͡ʑ", "ɸ", "s", "z", "ɕ", "ʑ",
    "ç", "h", "m", "n", "ɲ", "ɴ", "ɾ", "w", "j",
]


@pytest.fixture
def voicing_table() -> dict[str, dict[str, str]]:
    """The smallest useful feature table: a voicing contrast."""
    return {"p": {"voice": "-"}, "b": {"voice": "+"}}


@pytest.fixture
def toy_table() -> dict[str, dict[str, str]]:
    """A small feature table with overlapping natural classes."""
    return {
        "p": {"syllabic": "-", "voice": "-", "nasal": "-", "labial": "+"},
        "b": {"syllabic": "-", "voice": "+", "nasal": "-", "labial": "+"},
        "m": {"syllabic": "-", "voice": "+", "nasal": "+", "labial": "+"},
        "t": {"syllabic": "-", "voice": "-", "nasal": "-", "labial": "-"},
        "n": {"syllabic": "-", "voice": "+", "nasal": "+", "labial": "-"},
        "a": {"syllabic": "+", "voice": "+", "nasal": "-"},
        "i": {"syllabic": "+", "voice": "+", "nasal": "-"},
    }


@pytest.fixture
def toy_inventory(toy_table) -> Inventory:
    """Root inventory built from ``toy_table``."""
    return Inventory.from_table(toy_table)


@pytest.fixture(scope="session")
def hayes() -> Inventory:
    """The bundled Hayes feature system."""
    return load_feature_system("hayes")


@pytest.fixture(scope="session")
def english(hayes) -> Inventory:
    """English phonemes derived from the Hayes system (distinctive only)."""
    return Inventory.from_feature_system(hayes, ENGLISH_SYMBOLS)


@pytest.fixture(scope="session")
def japanese(hayes) -> Inventory:
    """Japanese phonemes derived from the Hayes system (distinctive only)."""
    return Inventory.from_feature_system(hayes, JAPANESE_SYMBOLS)


@pytest.fixture
def english_symbols() -> list[str]:
    """Symbols of the English inventory, in derivation order."""
    return list(ENGLISH_SYMBOLS)
