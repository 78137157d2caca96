import string
from typing import ClassVar, TextIO


class TextNormalizer:
    """
    Normalizes text before it is enciphered.

    Handles:
    - Case conversion (letters become uppercase)
    - Digit spelling (digits become English words)
    - Removal of everything else, including whitespace and non-ASCII
    """

    DIGIT_WORDS: ClassVar[dict[str, str]] = {
        "0": "ZERO",
        "1": "ONE",
        "2": "TWO",
        "3": "THREE",
        "4": "FOUR",
        "5": "FIVE",
        "6": "SIX",
        "7": "SEVEN",
        "8": "EIGHT",
        "9": "NINE",
    }

    def transform_char(self, char: str) -> str:
        """
        Normalize a single character.

        Args:
            char: One input character

        Returns:
            The replacement text, possibly empty
        """
        if char in string.ascii_letters:
            return char.upper()
        return self.DIGIT_WORDS.get(char, "")

    def normalize(self, text: str) -> str:
        """Normalize a whole string character by character."""
        return "".join(self.transform_char(char) for char in text)

    def normalize_stream(self, stream: TextIO) -> str:
        """
        Read a text stream to exhaustion, normalizing as it goes.

        Args:
            stream: Open text stream (a file or stdin)

        Returns:
            Concatenated normalized text
        """
        result = []
        for line in stream:
            for char in line:
                result.append(self.transform_char(char))
        return "".join(result)
