from typing import Type

from mpags_cipher.models.schemas import CipherType
from mpags_cipher.services.engines.base import CipherEngine


class EngineRegistry:
    """
    Registry for cipher engines.

    Maps each cipher type to its engine class and builds keyed instances.
    """

    _engines: dict[CipherType, Type[CipherEngine]] = {}

    @classmethod
    def register(cls, engine_class: Type[CipherEngine]) -> Type[CipherEngine]:
        """
        Register a cipher engine class.

        Can be used as a decorator:
            @EngineRegistry.register
            class CaesarEngine(CipherEngine):
                ...

        Args:
            engine_class: The engine class to register

        Returns:
            The engine class (for decorator usage)
        """
        cls._engines[engine_class.cipher_type] = engine_class
        return engine_class

    def construct(self, cipher_type: CipherType, key: str) -> CipherEngine:
        """
        Build an engine for the specified cipher type bound to a key.

        Args:
            cipher_type: The type of cipher
            key: The key string, passed through unchanged

        Returns:
            Engine instance

        Raises:
            InvalidKey: If the engine rejects the key
            KeyError: If no engine is registered for the cipher type
        """
        return self._engines[cipher_type](key)

    @classmethod
    def list_registered(cls) -> list[CipherType]:
        """
        List all registered cipher types.

        Returns:
            List of registered cipher types
        """
        return list(cls._engines.keys())

    @classmethod
    def is_registered(cls, cipher_type: CipherType) -> bool:
        """
        Check if a cipher type is registered.

        Args:
            cipher_type: The cipher type to check

        Returns:
            True if registered
        """
        return cipher_type in cls._engines


def construct(cipher_type: CipherType, key: str) -> CipherEngine:
    """Build the engine for a cipher type; raises InvalidKey on a bad key."""
    return EngineRegistry().construct(cipher_type, key)


# Import engines to trigger registration
def _load_engines() -> None:
    """Load all engine modules to trigger registration."""
    from mpags_cipher.services.engines.monoalphabetic import caesar  # noqa: F401
    from mpags_cipher.services.engines.polyalphabetic import vigenere  # noqa: F401
    from mpags_cipher.services.engines.polygraphic import playfair  # noqa: F401


# Load engines when module is imported
_load_engines()
