"""G2PManager: orthography to IPA conversion feeding the tokenizer."""

from __future__ import annotations

import logging

from phonemizer.backend import EspeakBackend
from phonemizer.separator import Separator

from phonolo.g2p.result import G2PResult
from phonolo.inventory.models import Inventory
from phonolo.transcription.word import Word


logger = logging.getLogger(__name__)

# Separator config: space between phones, | between words
_PHONE_SEP = Separator(phone=" ", word="|", syllable="")

_TIE_BAR = "͡"
_LENGTH_MARKS = "ːˑ"


def _parse_words(ipa_raw: str) -> list[list[str]]:
    """Split phone-separated espeak output into per-word phone lists.

    Strips stress marks and drops empty words.
    """
    cleaned = ipa_raw.replace("ˈ", "").replace("ˌ", "")
    words = [w.split() for w in cleaned.split("|")]
    return [phones for phones in words if phones]


def _tie(phone: str) -> str:
    """Write a two-character phone with a tie bar ('dʒ' → 'd͡ʒ')."""
    if len(phone) == 2 and _TIE_BAR not in phone:
        return phone[0] + _TIE_BAR + phone[1]
    return phone


def _fit_phone(phone: str, inventory: Inventory) -> str:
    """Spell an espeak phone the way the inventory spells it.

    espeak writes affricates without a tie bar and marks vowel length,
    while feature tables typically use 'd͡ʒ' and have no long vowels.
    The first spelling the inventory knows wins: as given, tied,
    without length, tied without length. Otherwise the phone is
    returned unchanged for the tokenizer to split or reject.
    """
    bare = phone.rstrip(_LENGTH_MARKS) or phone
    for candidate in (phone, _tie(phone), bare, _tie(bare)):
        if candidate in inventory:
            if candidate != phone:
                logger.debug("Respelled espeak phone %r as %r", phone, candidate)
            return candidate
    return phone


def _map_espeak_language(language: str) -> str:
    """Normalize a language code to an espeak-ng voice name ('en_US' → 'en-us')."""
    return language.lower().replace("_", "-")


class G2PManager:
    """Converts orthographic text to IPA and into inventory segments.

    Currently supports:
        - "espeak": espeak-ng via the phonemizer library

    Args:
        backend: Which G2P backend to use. Default: "espeak".
    """

    def __init__(self, backend: str = "espeak") -> None:
        if backend not in ("espeak",):
            raise ValueError(f"Unsupported backend: {backend!r}. Supported: 'espeak'")
        self._backend_name = backend
        # Cache EspeakBackend instances per language
        self._backends: dict[str, EspeakBackend] = {}

    @property
    def backend(self) -> str:
        """Currently active backend name."""
        return self._backend_name

    def _get_espeak_backend(self, language: str) -> EspeakBackend:
        """Get or create a cached EspeakBackend for the given language."""
        lang = _map_espeak_language(language)
        if lang not in self._backends:
            logger.info("Initialising espeak backend for %s", lang)
            self._backends[lang] = EspeakBackend(lang, with_stress=False)
        return self._backends[lang]

    def phonemize(self, text: str, language: str = "en-us") -> G2PResult:
        """Convert text to IPA.

        Args:
            text: Input text (word or sentence).
            language: Language code (e.g., 'en-us', 'ja').

        Returns:
            G2PResult with the phones and IPA transcription of each word.
        """
        if not text or not text.strip():
            return G2PResult(text=text, ipa="", words=[], language=language)

        backend = self._get_espeak_backend(language)
        # phonemizer expects a list and returns a list
        ipa_list = backend.phonemize([text], separator=_PHONE_SEP, strip=True)
        phones = _parse_words(ipa_list[0] if ipa_list else "")
        words = ["".join(p) for p in phones]

        return G2PResult(
            text=text,
            ipa=" ".join(words),
            words=words,
            language=language,
            phones=phones,
        )

    def transcribe(
        self, text: str, inventory: Inventory, language: str = "en-us"
    ) -> list[Word]:
        """Phonemize text and tokenize each word under an inventory.

        Each espeak phone is first respelled to the inventory's form of
        it where one exists, e.g. 'tʃ' to 't͡ʃ' or 'iː' to 'i'.

        If the backend returns a different number of words than the text
        contains (e.g. for digits or clitics), the whole text becomes a
        single Word.

        Args:
            text: Input text.
            inventory: Inventory whose segments the IPA must parse into.
            language: Language code for G2P conversion.

        Returns:
            One Word per orthographic word.

        Raises:
            TranscriptionError: If the IPA contains a sound the inventory
                does not have.
        """
        result = self.phonemize(text, language=language)
        orthographic = text.split()
        fitted = [
            " ".join(_fit_phone(p, inventory) for p in phones)
            for phones in result.phones
        ]

        if len(orthographic) != len(fitted):
            logger.warning(
                "Word count mismatch for %r: %d orthographic, %d phonemized",
                text, len(orthographic), len(fitted),
            )
            return [Word.parse(text.strip(), " ".join(fitted), inventory)]

        return [
            Word.parse(word, ipa, inventory)
            for word, ipa in zip(orthographic, fitted)
        ]
