"""Authentication service.

Password hashing, credential verification and token issuance on top of an
injected CredentialStore.

Security properties:
- Passwords are hashed with bcrypt (salted, adaptive, work factor configurable)
- Verification uses bcrypt.checkpw, which compares in constant time
- Login failures are indistinguishable to the caller: unknown email and wrong
  password raise the same InvalidCredentials with the same message, and an
  unknown email still pays for one bcrypt check
- The password hash never leaves this module except into the store

AuthService holds only immutable configuration, so one instance can serve
concurrent requests from many threads.
"""

import logging
from typing import TYPE_CHECKING

import bcrypt
import jwt

from ..config import Settings
from ..exceptions import ConfigurationError, InternalError, InvalidCredentials, ValidationError
from . import token
from .schemas import MAX_PASSWORD_BYTES, UserResponse, normalize_email

if TYPE_CHECKING:
    from ..db import CredentialStore

logger = logging.getLogger(__name__)

MIN_WORK_FACTOR = 4
MAX_WORK_FACTOR = 31
DEFAULT_WORK_FACTOR = 12

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


# ============================================================================
# Password Hashing
# ============================================================================


def hash_password(password: str, work_factor: int = DEFAULT_WORK_FACTOR) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password
        work_factor: bcrypt cost (log2 rounds)

    Returns:
        Bcrypt hash string ($2b$ prefix, salt and cost embedded)

    Raises:
        ValidationError: If the password is longer than bcrypt accepts
    """
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
            {"field": "password"}
        )

    salt = bcrypt.gensalt(rounds=work_factor)
    return bcrypt.hashpw(password_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against a bcrypt hash.

    Raises:
        ValueError: If password_hash is not a bcrypt hash
    """
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(password_bytes, password_hash.encode("utf-8"))


def validate_work_factor(work_factor: int) -> None:
    if not MIN_WORK_FACTOR <= work_factor <= MAX_WORK_FACTOR:
        raise ConfigurationError(
            "bcrypt work factor out of range",
            {"work_factor": work_factor, "min": MIN_WORK_FACTOR, "max": MAX_WORK_FACTOR}
        )


# ============================================================================
# Auth Service
# ============================================================================


class AuthService:
    """Registers users and issues signed tokens on successful login."""

    def __init__(
        self,
        store: "CredentialStore",
        secret_key: str | bytes,
        *,
        algorithm: str = "HS256",
        token_expiry_days: int = 30,
        bcrypt_work_factor: int = DEFAULT_WORK_FACTOR,
    ):
        """Validate configuration and bind the service to a store.

        Raises:
            ConfigurationError: If the signing key, algorithm, token lifetime
                or work factor is unusable
        """
        token.validate_signing_key(secret_key, algorithm)
        validate_work_factor(bcrypt_work_factor)
        if token_expiry_days <= 0:
            raise ConfigurationError(
                "Token expiry must be positive",
                {"token_expiry_days": token_expiry_days}
            )

        self._store = store
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._token_expiry_days = token_expiry_days
        self._work_factor = bcrypt_work_factor

        # Checked against on unknown emails so both login failure paths cost
        # one bcrypt comparison at the configured work factor
        self._dummy_hash = hash_password("credgate-timing-equalizer", bcrypt_work_factor)

    @classmethod
    def from_settings(cls, store: "CredentialStore", settings: Settings) -> "AuthService":
        return cls(
            store,
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            token_expiry_days=settings.jwt_expiry_days,
            bcrypt_work_factor=settings.bcrypt_work_factor,
        )

    def register(self, email: str, password: str) -> int:
        """
        Create an account.

        Returns:
            The new user's id

        Raises:
            DuplicateEmail: If the email already has an account
            StoreUnavailable: If the store write fails
            ValidationError: If the password is too long to hash
        """
        email = normalize_email(email)
        password_hash = hash_password(password, self._work_factor)

        user_id = self._store.create_user(email, password_hash)

        logger.info(f"Registered user {user_id}")
        return user_id

    def login(self, email: str, password: str) -> str:
        """
        Verify credentials and mint a token.

        Returns:
            Signed JWT asserting the user's id

        Raises:
            InvalidCredentials: If the email is unknown or the password is wrong
            StoreUnavailable: If the lookup fails
        """
        email = normalize_email(email)
        user = self._store.get_user_by_email(email)

        if user is None:
            verify_password(password, self._dummy_hash)
            logger.warning(f"Failed login for {email}: unknown email")
            raise InvalidCredentials(INVALID_CREDENTIALS_MESSAGE)

        try:
            matches = verify_password(password, user.password_hash)
        except ValueError as e:
            logger.error(f"Stored hash for user {user.id} is not a bcrypt hash")
            raise InternalError("Stored credentials are corrupt") from e

        if not matches:
            logger.warning(f"Failed login for {email}: bad password")
            raise InvalidCredentials(INVALID_CREDENTIALS_MESSAGE)

        logger.info(f"Successful login for user {user.id}")
        return self.issue_token(user.id)

    def issue_token(self, user_id: int) -> str:
        """Mint a signed token asserting user_id."""
        return token.generate_access_token(
            user_id,
            self._secret_key,
            algorithm=self._algorithm,
            expiry_days=self._token_expiry_days,
        )

    def get_user(self, user_id: int) -> UserResponse | None:
        user = self._store.get_user_by_id(user_id)
        return user.to_response() if user else None

    def authenticate_token(self, token_str: str) -> UserResponse:
        """
        Resolve a bearer token to the user it was issued to.

        Raises:
            InvalidCredentials: If the token is invalid, expired, or its
                user no longer exists
        """
        try:
            payload = token.validate_access_token(
                token_str, self._secret_key, algorithm=self._algorithm
            )
        except jwt.ExpiredSignatureError:
            logger.warning("Rejected expired token")
            raise InvalidCredentials("Token has expired", {"code": "token_expired"})
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected invalid token: {e}")
            raise InvalidCredentials("Invalid token", {"code": "invalid_token"})

        user = self.get_user(payload.user_id)
        if user is None:
            logger.warning(f"Token for missing user {payload.user_id}")
            raise InvalidCredentials("Invalid token", {"code": "invalid_token"})
        return user
