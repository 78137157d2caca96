from abc import ABC, abstractmethod

from mpags_cipher.models.schemas import CipherMode, CipherType


class CipherEngine(ABC):
    """
    Abstract base class for all cipher engines.

    An engine is bound to one key for its whole lifetime. The key is
    validated and turned into whatever lookup material the cipher needs
    in the constructor, so that apply() only reads instance state. This
    lets a single engine be shared by several worker threads.

    Each cipher implementation must provide:
    - encrypt(): Encrypt plaintext with the bound key
    - decrypt(): Decrypt ciphertext with the bound key
    """

    # Cipher metadata
    name: str
    cipher_type: CipherType

    def __init__(self, key: str):
        """
        Bind the engine to a key.

        Args:
            key: The key exactly as given on the command line

        Raises:
            InvalidKey: If the key is not acceptable for this cipher
        """
        self.key = key

    def apply(self, text: str, mode: CipherMode) -> str:
        """
        Apply the cipher in the requested direction.

        Args:
            text: Normalized input text
            mode: Encrypt or decrypt

        Returns:
            The transformed text
        """
        if mode == CipherMode.DECRYPT:
            return self.decrypt(text)
        return self.encrypt(text)

    @abstractmethod
    def encrypt(self, plaintext: str) -> str:
        """
        Encrypt plaintext with the bound key.

        Args:
            plaintext: The plaintext to encrypt

        Returns:
            Ciphertext
        """
        pass

    @abstractmethod
    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt ciphertext with the bound key.

        Args:
            ciphertext: The ciphertext to decrypt

        Returns:
            Plaintext
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self.key!r})"
