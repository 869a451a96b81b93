"""Transcription parsing: longest-match tokenizer and transcribed words."""

from phonolo.transcription.tokenizer import Tokenizer, TranscriptionError, parse
from phonolo.transcription.word import Word

__all__ = ["Tokenizer", "TranscriptionError", "Word", "parse"]
