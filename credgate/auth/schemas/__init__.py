"""Authentication Pydantic schemas for validation and responses."""

from .auth import (
    MAX_PASSWORD_BYTES,
    Credentials,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenPayload,
    TokenResponse,
    UserRecord,
    UserResponse,
    normalize_email,
)

__all__ = [
    "MAX_PASSWORD_BYTES",
    "Credentials",
    "LoginRequest",
    "RegisterRequest",
    "RegisterResponse",
    "TokenPayload",
    "TokenResponse",
    "UserRecord",
    "UserResponse",
    "normalize_email",
]
