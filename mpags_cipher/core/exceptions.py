from enum import Enum
from typing import Any


class CipherToolError(Exception):
    """Base exception for all mpags-cipher errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ArgumentErrorKind(str, Enum):
    """Kinds of argument/validation failure, valued by their stderr category."""

    MISSING_ARGUMENT = "Missing argument"
    UNKNOWN_ARGUMENT = "Unknown argument"
    INVALID_CIPHER = "Invalid cipher"
    INVALID_KEY = "Invalid key"


class ArgumentError(CipherToolError):
    """Raised when the run cannot be configured from what the user supplied."""

    kind: ArgumentErrorKind


class MissingArgument(ArgumentError):
    """Raised when a value-requiring flag is the last token."""

    kind = ArgumentErrorKind.MISSING_ARGUMENT

    def __init__(self, flag: str, expected: str):
        self.flag = flag
        super().__init__(
            f"{flag} requires {expected}",
            {"flag": flag},
        )


class UnknownArgument(ArgumentError):
    """Raised when a token is not a recognised option."""

    kind = ArgumentErrorKind.UNKNOWN_ARGUMENT

    def __init__(self, token: str):
        self.token = token
        super().__init__(
            f"'{token}' is not a valid argument",
            {"token": token},
        )


class InvalidCipher(ArgumentError):
    """Raised when the value after -c does not name a supported cipher."""

    kind = ArgumentErrorKind.INVALID_CIPHER

    def __init__(self, value: str, supported: list[str]):
        self.value = value
        super().__init__(
            f"unknown cipher type '{value}' (expected one of {', '.join(supported)})",
            {"value": value, "supported": supported},
        )


class InvalidKey(ArgumentError):
    """Raised when a cipher engine rejects its key."""

    kind = ArgumentErrorKind.INVALID_KEY

    def __init__(self, cipher_name: str, reason: str):
        self.cipher_name = cipher_name
        super().__init__(
            f"{cipher_name} {reason}",
            {"cipher_name": cipher_name},
        )


class InputOutputError(CipherToolError):
    """Raised when an input or output file cannot be opened."""

    category = "I/O error"

    def __init__(self, path: str, direction: str, reason: str | None = None):
        self.path = path
        self.direction = direction
        message = f"failed to open {direction} file '{path}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, {"path": path, "direction": direction})
