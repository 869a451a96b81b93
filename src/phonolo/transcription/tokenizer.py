"""Tokenizer: longest-match segmentation of transcriptions.

Splits a transcription string into the segments of an Inventory by
scanning left to right and taking, at each position, the longest known
symbol that matches there. Whitespace between segments is discarded.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import TYPE_CHECKING, Iterator

from phonolo.inventory.models import Segment

if TYPE_CHECKING:
    from phonolo.inventory.models import Inventory


logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s*")


def _decompose(text: str) -> str:
    return unicodedata.normalize("NFD", text)


class TranscriptionError(ValueError):
    """A transcription contains text that matches no segment.

    Attributes:
        text: The (NFD-normalized) text being parsed.
        position: Offset in ``text`` where no segment matched.
    """

    def __init__(self, text: str, position: int) -> None:
        self.text = text
        self.position = position
        remainder = text[position:position + 10]
        super().__init__(
            f"Failed to parse transcription {text!r} at position {position}: "
            f"no segment matches {remainder!r}"
        )


def _sort_key(symbol: str) -> tuple[int, str]:
    """Longer symbols first, so no symbol is tried before one it prefixes."""
    return (-len(symbol), symbol)


class Tokenizer:
    """Maximal-munch tokenizer bound to one inventory.

    The candidate symbols are compiled once into a single alternation
    ordered by descending length (ties broken by code point order), so
    the result never depends on the inventory's insertion order.

    Matching runs on the canonically decomposed (NFD) forms of symbols
    and text. A symbol made only of combining marks therefore stays
    separable from the base symbol before it, where composing the text
    would fuse the two into one precomposed character.

    Args:
        inventory: The inventory whose segments make up the vocabulary.
    """

    def __init__(self, inventory: Inventory) -> None:
        # NFD form -> Segment (keyed by its NFC symbol in the inventory)
        self._segments: dict[str, Segment] = {
            _decompose(s.symbol): s for s in inventory
        }
        order = sorted(self._segments, key=_sort_key)
        self._symbols: tuple[str, ...] = tuple(self._segments[d].symbol for d in order)

        if order:
            alternation = "|".join(re.escape(d) for d in order)
            self._pattern: re.Pattern[str] | None = re.compile(f"(?:{alternation})")
        else:
            self._pattern = None

        logger.debug("Compiled tokenizer over %d symbols", len(order))

    @property
    def symbols(self) -> tuple[str, ...]:
        """Candidate symbols in the order they are tried."""
        return self._symbols

    def spans(self, text: str) -> Iterator[tuple[Segment, int, int]]:
        """Yield ``(segment, start, end)`` for each segment in the text.

        Offsets refer to the NFD-normalized text. Leading whitespace and
        whitespace after each segment are skipped.

        Raises:
            TranscriptionError: When no segment matches at some position.
        """
        text = _decompose(text)
        pos = _WHITESPACE.match(text).end()
        while pos < len(text):
            match = self._pattern.match(text, pos) if self._pattern else None
            if match is None:
                raise TranscriptionError(text, pos)
            yield self._segments[match.group()], match.start(), match.end()
            pos = _WHITESPACE.match(text, match.end()).end()

    def parse(self, text: str) -> list[Segment]:
        """Split a transcription into segments.

        Args:
            text: Transcription, e.g. 'd͡ʒʌmps' or 'd͡ʒ ʌ m p s'.

        Returns:
            The segments in order. Empty or whitespace-only text gives [].

        Raises:
            TranscriptionError: When no segment matches at some position.
                Nothing is returned for a partially parsed string.
        """
        return [segment for segment, _, _ in self.spans(text)]


def parse(inventory: Inventory, text: str) -> list[Segment]:
    """Tokenize ``text`` into the segments of ``inventory``.

    Uses the inventory's cached tokenizer.

    Raises:
        TranscriptionError: When no segment matches at some position.
    """
    return inventory.parse(text)
