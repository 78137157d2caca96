import string
from typing import ClassVar

from mpags_cipher.core.exceptions import InvalidKey
from mpags_cipher.models.schemas import CipherType
from mpags_cipher.services.engines.base import CipherEngine
from mpags_cipher.services.engines.registry import EngineRegistry


@EngineRegistry.register
class CaesarEngine(CipherEngine):
    """
    Caesar cipher engine.

    The Caesar cipher is a simple substitution cipher that shifts each letter
    by a fixed amount. The key is a non-negative integer; an empty key is the
    null key (shift of 0).
    """

    name = "Caesar cipher"
    cipher_type = CipherType.CAESAR

    ALPHABET: ClassVar[str] = string.ascii_uppercase

    def __init__(self, key: str):
        super().__init__(key)
        self.shift = self._parse_key(key)

    def encrypt(self, plaintext: str) -> str:
        """Encrypt plaintext with the bound shift."""
        return self._shift(plaintext, self.shift)

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt by shifting in reverse."""
        return self._shift(ciphertext, -self.shift)

    def _parse_key(self, key: str) -> int:
        """Parse key to integer shift value."""
        if not key:
            return 0
        if not all(c in string.digits for c in key):
            raise InvalidKey(self.name, "requires a non-negative integer key")

        # Reduce digit by digit; keys may be longer than int() will convert
        shift = 0
        for digit in key:
            shift = (shift * 10 + int(digit)) % 26
        return shift

    def _shift(self, text: str, shift: int) -> str:
        """Shift each uppercase letter; pass everything else through."""
        result = []

        for char in text:
            if char in self.ALPHABET:
                idx = self.ALPHABET.index(char)
                result.append(self.ALPHABET[(idx + shift) % 26])
            else:
                result.append(char)

        return "".join(result)
