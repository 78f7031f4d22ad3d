"""Errors raised while deriving keys and parsing tokens."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Raised when the signing setup is unusable. Not recoverable by callers."""


class TokenError(Exception):
    """Base class for recoverable token failures."""


class InvalidSignatureError(TokenError):
    """Raised when a token's signature or algorithm does not match."""


class MalformedTokenError(TokenError):
    """Raised when a token cannot be decoded."""


class TokenExpiredError(TokenError):
    """Raised when a JWT token has expired."""


class ClaimTypeMismatchError(TokenError):
    """Raised when a claim is present but has the wrong type."""
