"""Mapping from service error kinds to HTTP responses."""

from ..exceptions import CredGateError, ErrorKind

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.DUPLICATE_EMAIL: 409,
    ErrorKind.INVALID_CREDENTIALS: 401,
    ErrorKind.STORE_UNAVAILABLE: 503,
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.CONFIGURATION_ERROR: 500,
    ErrorKind.INTERNAL_ERROR: 500,
}


def error_body(error: CredGateError) -> dict:
    """Render an error in the standard JSON envelope."""
    response = {
        "error": {
            "type": error.kind.value,
            "message": error.message
        }
    }
    if error.details:
        response["error"]["details"] = error.details
    return response
