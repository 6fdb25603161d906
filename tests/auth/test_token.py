"""
Tests for JWT Token Service.

Tests verify that:
- Tokens carry user_id, iat and exp
- Tokens validate with the signing key and fail with any other
- Expired, malformed and incomplete tokens are rejected
- Expiry introspection works
- Signing keys are checked up front
"""

from datetime import timedelta

import jwt as pyjwt
import pytest

from credgate.auth.token import (
    decode_token_no_validation,
    generate_access_token,
    get_token_expiry_remaining,
    is_token_expired,
    validate_access_token,
    validate_signing_key,
)
from credgate.config import PLACEHOLDER_JWT_SECRET_KEY
from credgate.exceptions import ConfigurationError
from credgate.utils import isodatetime
from tests.conftest import OTHER_SECRET, TEST_SECRET


def _expired_token(secret=TEST_SECRET):
    past_ts = isodatetime.now_unix() - (60 * 60)  # 1 hour ago
    return pyjwt.encode(
        {"user_id": 1, "iat": past_ts - 3600, "exp": past_ts},
        secret,
        algorithm="HS256",
    )


# ============================================================================
# Token Generation Tests
# ============================================================================


class TestGenerateAccessToken:
    """Tests for generate_access_token function."""

    def test_token_contains_required_claims(self):
        token = generate_access_token(7, TEST_SECRET)
        payload = pyjwt.decode(token, options={"verify_signature": False})

        assert payload["user_id"] == 7
        assert isinstance(payload["iat"], int)
        assert isinstance(payload["exp"], int)

    def test_token_uses_hs256(self):
        token = generate_access_token(7, TEST_SECRET)
        assert pyjwt.get_unverified_header(token)["alg"] == "HS256"

    def test_token_expiry_matches_configuration(self):
        token = generate_access_token(7, TEST_SECRET, expiry_days=2)
        payload = pyjwt.decode(token, options={"verify_signature": False})

        assert payload["exp"] - payload["iat"] == 2 * 24 * 60 * 60

    def test_token_issued_at_is_current_time(self):
        before = isodatetime.now_unix()
        token = generate_access_token(7, TEST_SECRET)
        after = isodatetime.now_unix()

        payload = pyjwt.decode(token, options={"verify_signature": False})
        assert before - 2 <= payload["iat"] <= after + 2

    def test_token_signed_with_given_key(self):
        token = generate_access_token(7, TEST_SECRET)
        payload = pyjwt.decode(token, TEST_SECRET, algorithms=["HS256"])
        assert payload["user_id"] == 7


# ============================================================================
# Token Validation Tests
# ============================================================================


class TestValidateAccessToken:
    """Tests for validate_access_token function."""

    def test_validate_valid_token(self):
        token = generate_access_token(7, TEST_SECRET)
        payload = validate_access_token(token, TEST_SECRET)

        assert payload.user_id == 7
        assert payload.exp > payload.iat

    def test_validate_with_other_key_fails(self):
        token = generate_access_token(7, TEST_SECRET)
        with pytest.raises(pyjwt.InvalidSignatureError):
            validate_access_token(token, OTHER_SECRET)

    def test_forged_token_rejected(self):
        """Re-signing valid claims with another key does not pass."""
        token = generate_access_token(7, TEST_SECRET)
        payload = pyjwt.decode(token, options={"verify_signature": False})
        forged = pyjwt.encode(payload, OTHER_SECRET, algorithm="HS256")

        with pytest.raises(pyjwt.InvalidTokenError):
            validate_access_token(forged, TEST_SECRET)

    def test_expired_token_rejected(self):
        with pytest.raises(pyjwt.ExpiredSignatureError):
            validate_access_token(_expired_token(), TEST_SECRET)

    @pytest.mark.parametrize("token", [
        "not-a-jwt",
        "invalid.token.here",
        "eyJhbGciOiJub25lIn0.eyJ1c2VyX2lkIjoxfQ.",  # alg=none
        "",
    ])
    def test_malformed_token_rejected(self, token):
        with pytest.raises(pyjwt.InvalidTokenError):
            validate_access_token(token, TEST_SECRET)

    def test_missing_claims_rejected(self):
        token = pyjwt.encode({"user_id": 7}, TEST_SECRET, algorithm="HS256")
        with pytest.raises(pyjwt.MissingRequiredClaimError):
            validate_access_token(token, TEST_SECRET)

    def test_non_integer_user_id_rejected(self):
        now = isodatetime.now_unix()
        token = pyjwt.encode(
            {"user_id": "admin", "iat": now, "exp": now + 60},
            TEST_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(pyjwt.InvalidTokenError):
            validate_access_token(token, TEST_SECRET)


# ============================================================================
# Token Introspection Tests
# ============================================================================


class TestTokenIntrospection:
    """Tests for expiry helpers and unverified decoding."""

    def test_remaining_time_for_valid_token(self):
        token = generate_access_token(7, TEST_SECRET, expiry_days=30)
        remaining = get_token_expiry_remaining(token, TEST_SECRET)

        assert isinstance(remaining, timedelta)
        assert timedelta(days=30) - timedelta(minutes=1) < remaining <= timedelta(days=30)

    def test_remaining_time_for_expired_token_is_none(self):
        assert get_token_expiry_remaining(_expired_token(), TEST_SECRET) is None

    def test_remaining_time_for_invalid_token_is_none(self):
        assert get_token_expiry_remaining("invalid-token", TEST_SECRET) is None

    def test_is_token_expired(self):
        assert is_token_expired(generate_access_token(7, TEST_SECRET), TEST_SECRET) is False
        assert is_token_expired(_expired_token(), TEST_SECRET) is True
        assert is_token_expired("", TEST_SECRET) is True

    def test_decode_without_verification(self):
        """Unverified decoding exposes claims even for a foreign signature."""
        token = generate_access_token(7, OTHER_SECRET)
        assert decode_token_no_validation(token)["user_id"] == 7


# ============================================================================
# Signing Key Validation Tests
# ============================================================================


class TestValidateSigningKey:
    """Tests for validate_signing_key function."""

    def test_accepts_good_key(self):
        validate_signing_key(TEST_SECRET)

    def test_accepts_bytes_key(self):
        validate_signing_key(TEST_SECRET.encode())

    @pytest.mark.parametrize("key", ["", b""])
    def test_rejects_empty_key(self, key):
        with pytest.raises(ConfigurationError):
            validate_signing_key(key)

    @pytest.mark.parametrize("key", [PLACEHOLDER_JWT_SECRET_KEY, PLACEHOLDER_JWT_SECRET_KEY.encode()])
    def test_rejects_placeholder_key(self, key):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_signing_key(key)
        assert "placeholder" in exc_info.value.message

    @pytest.mark.parametrize("algorithm", ["RS256", "none", "ES256"])
    def test_rejects_non_hmac_algorithm(self, algorithm):
        with pytest.raises(ConfigurationError):
            validate_signing_key(TEST_SECRET, algorithm)

    def test_short_key_logs_warning(self, caplog):
        with caplog.at_level("WARNING", logger="credgate.auth.token"):
            validate_signing_key("short")
        assert "recommended" in caplog.text
