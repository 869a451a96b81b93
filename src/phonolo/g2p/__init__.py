"""Grapheme-to-phoneme front end for producing transcriptions."""

from phonolo.g2p.manager import G2PManager
from phonolo.g2p.result import G2PResult

__all__ = ["G2PManager", "G2PResult"]
