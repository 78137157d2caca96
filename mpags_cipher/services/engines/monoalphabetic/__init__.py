"""Monoalphabetic cipher engines."""

from mpags_cipher.services.engines.monoalphabetic.caesar import CaesarEngine

__all__ = [
    "CaesarEngine",
]
