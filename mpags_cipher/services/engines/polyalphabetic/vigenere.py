import string
from typing import ClassVar

from mpags_cipher.core.exceptions import InvalidKey
from mpags_cipher.models.schemas import CipherType
from mpags_cipher.services.engines.base import CipherEngine
from mpags_cipher.services.engines.registry import EngineRegistry


@EngineRegistry.register
class VigenereEngine(CipherEngine):
    """
    Vigenère cipher engine.

    Each letter is shifted by the alphabet position of the corresponding
    keyword letter, the keyword repeating over the text. The keyword
    position only advances on letters. An empty keyword is the null key.
    """

    name = "Vigenere cipher"
    cipher_type = CipherType.VIGENERE

    ALPHABET: ClassVar[str] = string.ascii_uppercase

    def __init__(self, key: str):
        super().__init__(key)
        keyword = self._parse_key(key)
        self.shifts: tuple[int, ...] = tuple(self.ALPHABET.index(c) for c in keyword)

    def encrypt(self, plaintext: str) -> str:
        """Encrypt using the bound keyword."""
        return self._apply_shifts(plaintext, 1)

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt using the bound keyword."""
        return self._apply_shifts(ciphertext, -1)

    def _parse_key(self, key: str) -> str:
        """Parse key to an uppercase keyword."""
        if not all(c in string.ascii_letters for c in key):
            raise InvalidKey(self.name, "key must contain only letters")
        return key.upper()

    def _apply_shifts(self, text: str, direction: int) -> str:
        """Shift letters by the keyword, forwards or backwards."""
        if not self.shifts:
            return text

        result = []
        key_idx = 0
        period = len(self.shifts)

        for char in text:
            if char in self.ALPHABET:
                shift = self.shifts[key_idx % period]
                shifted_idx = (self.ALPHABET.index(char) + direction * shift) % 26
                result.append(self.ALPHABET[shifted_idx])
                key_idx += 1
            else:
                result.append(char)

        return "".join(result)
