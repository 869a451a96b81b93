"""G2PResult: data container for grapheme-to-phoneme conversion output."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class G2PResult:
    """Result of a grapheme-to-phoneme conversion.

    Attributes:
        text: Original input text.
        ipa: IPA transcription string, words separated by single spaces.
        words: IPA transcription of each word, in order.
        language: Language code used for conversion.
        phones: Phones of each word as the backend segmented them.
    """

    text: str
    ipa: str
    words: list[str]
    language: str
    phones: list[list[str]] = field(default_factory=list)

    @property
    def word_count(self) -> int:
        """Number of transcribed words."""
        return len(self.words)
