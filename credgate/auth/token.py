"""JWT token generation and validation.

Tokens are HS256-signed, self-contained bearer credentials asserting a
user_id. They are never persisted. Every token carries iat and exp; the
lifetime comes from settings.jwt_expiry_days rather than library defaults.

Key material is checked once, at startup, by validate_signing_key so that a
bad key fails the process instead of the first login.
"""

import logging
from datetime import timedelta

import jwt
from pydantic import ValidationError as PydanticValidationError

from ..config import PLACEHOLDER_JWT_SECRET_KEY
from ..exceptions import ConfigurationError
from ..utils import isodatetime
from .schemas import TokenPayload

logger = logging.getLogger(__name__)

HMAC_ALGORITHMS = frozenset({"HS256", "HS384", "HS512"})
REQUIRED_CLAIMS = ["user_id", "iat", "exp"]

# RFC 7518 asks for an HMAC key at least as long as the hash output
MIN_RECOMMENDED_KEY_BYTES = 32


def validate_signing_key(secret_key: str | bytes, algorithm: str = "HS256") -> None:
    """
    Check that the key and algorithm can sign tokens.

    Raises:
        ConfigurationError: If the algorithm is not HMAC, the key is empty
            or the shipped placeholder, or PyJWT refuses to sign with it
    """
    if algorithm not in HMAC_ALGORITHMS:
        raise ConfigurationError(
            "JWT algorithm must be an HMAC algorithm",
            {"algorithm": algorithm, "allowed": sorted(HMAC_ALGORITHMS)}
        )

    if not secret_key:
        raise ConfigurationError("JWT signing key must not be empty")

    key_bytes = secret_key.encode("utf-8") if isinstance(secret_key, str) else secret_key
    if key_bytes == PLACEHOLDER_JWT_SECRET_KEY.encode("utf-8"):
        raise ConfigurationError(
            "JWT signing key is the shipped placeholder; set CREDGATE_JWT_SECRET_KEY"
        )

    key_len = len(key_bytes)
    if key_len < MIN_RECOMMENDED_KEY_BYTES:
        logger.warning(
            f"JWT signing key is {key_len} bytes; "
            f"at least {MIN_RECOMMENDED_KEY_BYTES} is recommended"
        )

    try:
        jwt.encode({"probe": True}, secret_key, algorithm=algorithm)
    except (jwt.PyJWTError, TypeError, ValueError) as e:
        raise ConfigurationError(
            "JWT signing key is unusable",
            {"reason": str(e)}
        ) from e


def generate_access_token(
    user_id: int,
    secret_key: str | bytes,
    *,
    algorithm: str = "HS256",
    expiry_days: int = 30,
) -> str:
    """
    Generate a signed access token for a user.

    Args:
        user_id: Id of the authenticated user
        secret_key: Symmetric signing key
        algorithm: HMAC algorithm name
        expiry_days: Token lifetime in days

    Returns:
        Encoded JWT string
    """
    issued_at = isodatetime.now_unix()
    expires_at = issued_at + int(timedelta(days=expiry_days).total_seconds())

    payload = {
        "user_id": user_id,
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def validate_access_token(
    token: str,
    secret_key: str | bytes,
    *,
    algorithm: str = "HS256",
) -> TokenPayload:
    """
    Validate signature, expiry and claims of an access token.

    Returns:
        Decoded TokenPayload

    Raises:
        jwt.ExpiredSignatureError: If the token has expired
        jwt.InvalidTokenError: If the token is malformed, forged, or
            missing required claims
    """
    payload = jwt.decode(
        token,
        secret_key,
        algorithms=[algorithm],
        options={"require": REQUIRED_CLAIMS},
    )

    try:
        return TokenPayload(**payload)
    except PydanticValidationError as e:
        raise jwt.InvalidTokenError(f"Token claims are malformed: {e}") from e


def decode_token_no_validation(token: str) -> dict:
    """
    Decode a token WITHOUT verifying its signature.

    For debugging and introspection only. Never trust the result.
    """
    return jwt.decode(token, options={"verify_signature": False})


def get_token_expiry_remaining(
    token: str,
    secret_key: str | bytes,
    *,
    algorithm: str = "HS256",
) -> timedelta | None:
    """
    Time left before a token expires.

    Returns:
        Remaining lifetime, or None if the token is invalid or expired
    """
    try:
        payload = validate_access_token(token, secret_key, algorithm=algorithm)
    except jwt.InvalidTokenError:
        return None

    remaining = payload.exp - isodatetime.now_unix()
    return timedelta(seconds=remaining) if remaining > 0 else None


def is_token_expired(
    token: str,
    secret_key: str | bytes,
    *,
    algorithm: str = "HS256",
) -> bool:
    """Return True if the token is expired or otherwise invalid."""
    return get_token_expiry_remaining(token, secret_key, algorithm=algorithm) is None
