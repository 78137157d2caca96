"""Polygraphic cipher engines."""

from mpags_cipher.services.engines.polygraphic.playfair import PlayfairEngine

__all__ = [
    "PlayfairEngine",
]
