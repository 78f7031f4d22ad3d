"""tokenkit — HS256 token issuance and verification."""

from tokenkit.auth.errors import ConfigurationError, TokenError
from tokenkit.auth.jwt import TokenService
from tokenkit.config import Config

__all__ = ["Config", "ConfigurationError", "TokenError", "TokenService"]
