from enum import Enum

from pydantic import BaseModel, ConfigDict


# ============================================================================
# Enums
# ============================================================================


class CipherType(str, Enum):
    """Supported cipher types, valued by their command-line name."""

    CAESAR = "caesar"
    PLAYFAIR = "playfair"
    VIGENERE = "vigenere"


class CipherMode(str, Enum):
    """Direction in which a cipher is applied."""

    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


# ============================================================================
# Run Configuration
# ============================================================================


class RunConfiguration(BaseModel):
    """Settings for a single run, derived from the command line."""

    model_config = ConfigDict(frozen=True)

    help_requested: bool = False
    version_requested: bool = False

    # Files (None means stdin/stdout)
    input_file: str | None = None
    output_file: str | None = None

    # Cipher selection
    cipher_key: str = ""
    cipher_mode: CipherMode = CipherMode.ENCRYPT
    cipher_type: CipherType = CipherType.CAESAR
