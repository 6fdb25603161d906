"""Authentication endpoints for credgate.

These endpoints handle:
- POST /auth/register - Create account, return id and token
- POST /auth/login    - Authenticate and return token
- GET  /auth/me       - Resolve a bearer token to its user

All endpoints return JSON responses. The AuthService is taken from
current_app.extensions, where create_app installs it.
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from ..auth.schemas import LoginRequest, RegisterRequest, RegisterResponse, TokenResponse
from ..auth.service import AuthService
from ..exceptions import InvalidCredentials
from .validation import validate_request

logger = logging.getLogger(__name__)


# Create blueprint
auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


def _auth_service() -> AuthService:
    return current_app.extensions["credgate.auth_service"]


def _bearer_token() -> str:
    auth_header = request.headers.get("Authorization")
    if auth_header is None:
        raise InvalidCredentials(
            "Missing authorization header",
            {"expected": "Authorization: Bearer <token>"}
        )

    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise InvalidCredentials(
            "Invalid authorization header format",
            {"expected": "Authorization: Bearer <token>"}
        )

    return parts[1]


@auth_bp.post("/register")
@validate_request
def register(data: RegisterRequest):
    """
    Create an account and return a token for it.

    Returns:
        201: {"id": int, "token": str}
        400: ValidationError
        409: DuplicateEmail
        503: StoreUnavailable

    Example request:
    ```json
    {
        "email": "a@x.com",
        "password": "pw123"
    }
    ```
    """
    service = _auth_service()
    user_id = service.register(data.email, data.password)

    response = RegisterResponse(id=user_id, token=service.issue_token(user_id))
    return jsonify(response.model_dump()), 201


@auth_bp.post("/login")
@validate_request
def login(data: LoginRequest):
    """
    Authenticate and return a signed token.

    Returns:
        200: {"token": str, "token_type": "bearer"}
        400: ValidationError
        401: InvalidCredentials (same body for unknown email and bad password)
        503: StoreUnavailable
    """
    access_token = _auth_service().login(data.email, data.password)
    return jsonify(TokenResponse(token=access_token).model_dump()), 200


@auth_bp.get("/me")
def me():
    """
    Return the user a bearer token was issued to.

    Only checks that the token is genuine and unexpired; it grants nothing.

    Returns:
        200: {"id": int, "email": str, "created_at": str}
        401: InvalidCredentials
    """
    user = _auth_service().authenticate_token(_bearer_token())
    return jsonify(user.model_dump(mode="json")), 200
