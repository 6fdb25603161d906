"""Pydantic schemas for authentication.

Request schemas validate transport input. UserRecord is the store's internal
shape and is the only model that carries the password hash; responses use
UserResponse, which has no hash field.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def normalize_email(email: str) -> str:
    """Normalize an email for storage and lookup (trimmed, lowercase)."""
    return email.strip().lower()


# ============================================================================
# Store Model
# ============================================================================


class UserRecord(BaseModel):
    """User row as held by the credential store."""

    id: int
    email: str
    password_hash: str = Field(repr=False)
    created_at: datetime

    def to_response(self) -> "UserResponse":
        return UserResponse(id=self.id, email=self.email, created_at=self.created_at)


# ============================================================================
# Request Schemas
# ============================================================================


class Credentials(BaseModel):
    """Email and password pair shared by register and login."""

    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=1, description="Plaintext password")

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email_case(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class RegisterRequest(Credentials):
    """Body of POST /auth/register."""


class LoginRequest(Credentials):
    """Body of POST /auth/login."""


# ============================================================================
# Response Schemas
# ============================================================================


class UserResponse(BaseModel):
    """Public view of a user. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    created_at: datetime


class TokenResponse(BaseModel):
    """Response of a successful login."""

    token: str
    token_type: str = "bearer"


class RegisterResponse(BaseModel):
    """Response of a successful registration."""

    id: int
    token: str


# ============================================================================
# Token Claims
# ============================================================================


class TokenPayload(BaseModel):
    """Decoded claims of a signed access token."""

    user_id: int
    iat: int
    exp: int
