"""Custom exceptions for credgate.

Every error surfaced by the auth service carries an ErrorKind. The transport
layer maps each kind to its own status code explicitly, so no two kinds are
ever collapsed into the same response.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Distinct failure kinds exposed at the service boundary."""

    DUPLICATE_EMAIL = "DuplicateEmail"
    INVALID_CREDENTIALS = "InvalidCredentials"
    STORE_UNAVAILABLE = "StoreUnavailable"
    VALIDATION_ERROR = "ValidationError"
    CONFIGURATION_ERROR = "ConfigurationError"
    INTERNAL_ERROR = "InternalError"


class CredGateError(Exception):
    """Base exception for all credgate errors."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DuplicateEmail(CredGateError):
    """Raised when registering an email that already has an account."""

    kind = ErrorKind.DUPLICATE_EMAIL


class InvalidCredentials(CredGateError):
    """Raised when login fails, whatever the underlying reason."""

    kind = ErrorKind.INVALID_CREDENTIALS


class StoreUnavailable(CredGateError):
    """Raised when the credential store cannot complete an operation."""

    kind = ErrorKind.STORE_UNAVAILABLE


class ValidationError(CredGateError):
    """Raised when request data fails validation."""

    kind = ErrorKind.VALIDATION_ERROR


class ConfigurationError(CredGateError):
    """Raised at startup when key material or hashing parameters are unusable."""

    kind = ErrorKind.CONFIGURATION_ERROR


class InternalError(CredGateError):
    """Raised for unexpected failures."""

    kind = ErrorKind.INTERNAL_ERROR
