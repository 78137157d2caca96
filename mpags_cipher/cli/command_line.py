"""
Command-line processing.

The parser is a single left-to-right scan over the raw tokens. It never
touches the filesystem or builds a cipher; it only turns tokens into a
RunConfiguration or raises an ArgumentError.
"""

from typing import Any, Sequence

from mpags_cipher.core.exceptions import InvalidCipher, MissingArgument, UnknownArgument
from mpags_cipher.models.schemas import CipherMode, CipherType, RunConfiguration

# Options taking a free-form value, with the configuration field they set
VALUE_OPTIONS: dict[str, tuple[str, str]] = {
    "-i": ("input_file", "a filename argument"),
    "-o": ("output_file", "a filename argument"),
    "-k": ("cipher_key", "a string or integer key"),
}

CIPHER_NAMES: dict[str, CipherType] = {cipher.value: cipher for cipher in CipherType}

USAGE = """\
Usage: mpags-cipher [-h/--help] [--version] [-i <file>] [-o <file>] [-c <cipher>] [-k <key>] [--encrypt/--decrypt]

Encrypts/Decrypts input alphanumeric text using classical ciphers

Available options:

  -h|--help        Print this help message and exit

  --version        Print version information

  -i FILE          Read text to be processed from FILE
                   Stdin will be used if not supplied

  -o FILE          Write processed text to FILE
                   Stdout will be used if not supplied

  -c CIPHER        Specify the cipher to be used to perform the encryption/decryption
                   CIPHER can be caesar, playfair, or vigenere - caesar is the default

  -k KEY           Specify the cipher KEY
                   A null key, i.e. no encryption, is used if not supplied

  --encrypt        Will use the cipher to encrypt the input text (default behaviour)

  --decrypt        Will use the cipher to decrypt the input text
"""


def process_command_line(tokens: Sequence[str]) -> RunConfiguration:
    """
    Build the run configuration from raw command-line tokens.

    Token 0 is the program name and is skipped. Help and version stop the
    scan; whatever follows them is ignored. Repeated options overwrite
    earlier ones.

    Args:
        tokens: Full argv, program name included

    Returns:
        The validated configuration

    Raises:
        MissingArgument: A value-taking option is the last token
        InvalidCipher: The value after -c is not a supported cipher name
        UnknownArgument: Any other unrecognised token
    """
    settings: dict[str, Any] = {}
    n_tokens = len(tokens)

    i = 1
    while i < n_tokens:
        token = tokens[i]

        if token in ("-h", "--help"):
            settings["help_requested"] = True
            break
        elif token == "--version":
            settings["version_requested"] = True
            break
        elif token in VALUE_OPTIONS:
            field, expected = VALUE_OPTIONS[token]
            if i == n_tokens - 1:
                raise MissingArgument(token, expected)
            settings[field] = tokens[i + 1]
            i += 2
        elif token == "-c":
            if i == n_tokens - 1:
                raise MissingArgument(token, "the name of a cipher")
            value = tokens[i + 1]
            if value not in CIPHER_NAMES:
                raise InvalidCipher(value, list(CIPHER_NAMES))
            settings["cipher_type"] = CIPHER_NAMES[value]
            i += 2
        elif token == "--encrypt":
            settings["cipher_mode"] = CipherMode.ENCRYPT
            i += 1
        elif token == "--decrypt":
            settings["cipher_mode"] = CipherMode.DECRYPT
            i += 1
        else:
            raise UnknownArgument(token)

    return RunConfiguration(**settings)
