"""Authentication module for credgate.

This module provides the authentication core:
- Schema validation for auth operations
- Password hashing and verification (bcrypt)
- JWT token generation and validation (PyJWT)
- AuthService: registration and login over an injected credential store

HTTP endpoints live in credgate.api.
"""

from . import schemas, service, token

__all__ = ["schemas", "service", "token"]
