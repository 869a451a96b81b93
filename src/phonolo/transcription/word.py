"""Word: an orthographic word paired with its segment transcription."""

from __future__ import annotations

from dataclasses import dataclass

from phonolo.inventory.models import Inventory, Segment


@dataclass(frozen=True)
class Word:
    """A word with a phonetic or phonemic transcription.

    Attributes:
        text: Original (orthographic) text of the word.
        transcription: Segments of the transcription, in order.
        inventory: Inventory the segments belong to, if known.
    """

    text: str
    transcription: tuple[Segment, ...]
    inventory: Inventory | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "transcription", tuple(self.transcription))

    @classmethod
    def parse(cls, text: str, ipa: str, inventory: Inventory) -> Word:
        """Build a Word by tokenizing ``ipa`` under ``inventory``.

        Raises:
            TranscriptionError: If ``ipa`` does not parse.
        """
        return cls(text, tuple(inventory.parse(ipa)), inventory)

    @property
    def symbols(self) -> list[str]:
        """Segment symbols in order."""
        return [s.symbol for s in self.transcription]

    @property
    def ipa(self) -> str:
        """The transcription as one string."""
        return "".join(self.symbols)

    @property
    def segment_count(self) -> int:
        """Number of segments in the transcription."""
        return len(self.transcription)

    def describe(self) -> str:
        """Return the word with its transcription, e.g. 'dog /dɑɡ/'."""
        return f"{self.text} /{self.ipa}/"
