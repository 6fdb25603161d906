"""credgate: a minimal credential-issuance service."""

__version__ = "0.1.0"
