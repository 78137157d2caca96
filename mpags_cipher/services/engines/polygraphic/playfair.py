import string
from typing import ClassVar

from mpags_cipher.core.exceptions import InvalidKey
from mpags_cipher.models.schemas import CipherType
from mpags_cipher.services.engines.base import CipherEngine
from mpags_cipher.services.engines.registry import EngineRegistry


@EngineRegistry.register
class PlayfairEngine(CipherEngine):
    """
    Playfair cipher engine.

    The Playfair cipher encrypts digraphs (pairs of letters) using a 5x5 key square.
    The alphabet is reduced to 25 letters (I and J are combined).

    Rules for encryption:
    1. Same row: replace each letter with the one to its right
    2. Same column: replace each letter with the one below
    3. Rectangle: swap corners horizontally

    A doubled letter inside a digraph is split with an 'X' ('Q' for "XX"),
    and odd-length text is padded with a 'Z' ('X' after a final 'Z').
    Because of this padding the cipher does not preserve text length.
    """

    name = "Playfair cipher"
    cipher_type = CipherType.PLAYFAIR

    ALPHABET: ClassVar[str] = "ABCDEFGHIKLMNOPQRSTUVWXYZ"  # 25 letters, I=J
    SIZE: ClassVar[int] = 5

    def __init__(self, key: str):
        super().__init__(key)
        self.square = self._build_key_square(self._parse_key(key))

        # Lookup tables in both directions
        self._positions: dict[str, tuple[int, int]] = {}
        for row, letters in enumerate(self.square):
            for col, char in enumerate(letters):
                self._positions[char] = (row, col)

    def encrypt(self, plaintext: str) -> str:
        """Encrypt using Playfair cipher."""
        digraphs = self._prepare_digraphs(plaintext)
        return self._substitute(digraphs, 1)

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt using Playfair cipher."""
        text = self._clean(ciphertext)
        if len(text) % 2 != 0:
            text += "Z"

        digraphs = [(text[i], text[i + 1]) for i in range(0, len(text), 2)]
        return self._substitute(digraphs, -1)

    def _parse_key(self, key: str) -> str:
        """Parse key to the uppercase I=J keyword."""
        if not all(c in string.ascii_letters for c in key):
            raise InvalidKey(self.name, "key must contain only letters")
        return key.upper().replace("J", "I")

    def _build_key_square(self, keyword: str) -> list[list[str]]:
        """Build the 5x5 key square from a keyword."""
        # Remove duplicates while preserving order
        seen = set()
        key_letters = []
        for char in keyword + self.ALPHABET:
            if char not in seen:
                seen.add(char)
                key_letters.append(char)

        return [
            key_letters[i * self.SIZE:(i + 1) * self.SIZE]
            for i in range(self.SIZE)
        ]

    def _clean(self, text: str) -> str:
        """Uppercase, merge J into I and drop anything outside the square."""
        text = text.upper().replace("J", "I")
        return "".join(c for c in text if c in self._positions)

    def _prepare_digraphs(self, text: str) -> list[tuple[str, str]]:
        """
        Prepare text for Playfair encryption.

        - Convert to uppercase
        - Replace J with I
        - Insert X between double letters (Q between double X)
        - Pad with Z if odd length (X if the last letter is Z)
        """
        text = self._clean(text)

        result = []
        i = 0
        while i < len(text):
            first = text[i]
            second = text[i + 1] if i + 1 < len(text) else None

            if second is None:
                result.append((first, "X" if first == "Z" else "Z"))
                i += 1
            elif first == second:
                result.append((first, "Q" if first == "X" else "X"))
                i += 1
            else:
                result.append((first, second))
                i += 2

        return result

    def _substitute(self, digraphs: list[tuple[str, str]], step: int) -> str:
        """Apply the row/column/rectangle rules; step is +1 to encrypt, -1 to decrypt."""
        result = []
        for a, b in digraphs:
            row_a, col_a = self._positions[a]
            row_b, col_b = self._positions[b]

            if row_a == row_b:
                result.append(self.square[row_a][(col_a + step) % self.SIZE])
                result.append(self.square[row_b][(col_b + step) % self.SIZE])
            elif col_a == col_b:
                result.append(self.square[(row_a + step) % self.SIZE][col_a])
                result.append(self.square[(row_b + step) % self.SIZE][col_b])
            else:
                # Rectangle: swap columns
                result.append(self.square[row_a][col_b])
                result.append(self.square[row_b][col_a])

        return "".join(result)
