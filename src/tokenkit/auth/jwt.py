"""JWT token creation and validation."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any, TypeVar

import jwt

from tokenkit.auth.errors import (
    ClaimTypeMismatchError,
    ConfigurationError,
    InvalidSignatureError,
    MalformedTokenError,
    TokenError,
    TokenExpiredError,
)
from tokenkit.config import DEFAULT_EXPIRATION_MS, Config
from tokenkit.models.claims import TokenClaims

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
MIN_KEY_BYTES = 32

T = TypeVar("T")


class TokenService:
    """Issues and verifies HS256 tokens carrying a user id and username.

    The secret is fixed at construction. The derived key is cached on first
    use, so an instance can be shared across threads.
    """

    def __init__(self, secret: str, expiration_ms: int = DEFAULT_EXPIRATION_MS) -> None:
        if not secret:
            raise ConfigurationError("jwt secret is not configured")
        if expiration_ms <= 0:
            raise ConfigurationError(f"jwt expiration must be positive, got {expiration_ms}")
        self._secret = secret
        self.expiration_ms = expiration_ms
        self._key: bytes | None = None

    @classmethod
    def from_config(cls, config: Config) -> TokenService:
        return cls(config.jwt_secret, config.jwt_expiration_ms)

    def derive_signing_key(self) -> bytes:
        """Return the HMAC key for the configured secret.

        Secrets of at least 32 UTF-8 bytes are used as-is; shorter ones are
        replaced by their SHA-256 digest.
        """
        key_bytes = self._secret.encode("utf-8")
        if len(key_bytes) >= MIN_KEY_BYTES:
            return key_bytes

        logger.warning(
            "jwt secret is too short (%d bytes), use at least %d bytes",
            len(key_bytes),
            MIN_KEY_BYTES,
        )
        try:
            digest = hashlib.new("sha256")
        except ValueError as e:
            raise ConfigurationError("SHA-256 is not available") from e
        digest.update(key_bytes)
        return digest.digest()

    @property
    def signing_key(self) -> bytes:
        if self._key is None:
            self._key = self.derive_signing_key()
        return self._key

    def issue_token(self, user_id: int, username: str) -> str:
        """Create a signed token for a user."""
        now = datetime.now(UTC)
        claims = TokenClaims(
            user_id=user_id,
            username=username,
            issued_at=now,
            expiration=now + timedelta(milliseconds=self.expiration_ms),
        )
        token = jwt.encode(claims.to_payload(), self.signing_key, algorithm=ALGORITHM)
        logger.info("Issued token for user %d", user_id)
        return token

    def parse_claims(self, token: str, *, verify_exp: bool = True) -> dict[str, Any]:
        """Verify a token's signature and decode its claims.

        With ``verify_exp=False`` the signature and structure are still
        checked, only the expiration is not.
        """
        if not isinstance(token, str) or not token:
            raise MalformedTokenError("Token is empty")
        try:
            return jwt.decode(
                token,
                self.signing_key,
                algorithms=[ALGORITHM],
                options={"require": ["exp"], "verify_exp": verify_exp},
            )
        except jwt.ExpiredSignatureError as e:
            logger.warning("Token expired: %s", e)
            raise TokenExpiredError("Token has expired") from e
        except (jwt.InvalidSignatureError, jwt.InvalidAlgorithmError) as e:
            logger.warning("Token signature rejected: %s", e)
            raise InvalidSignatureError("Token signature is invalid") from e
        except jwt.InvalidTokenError as e:
            logger.warning("Malformed token: %s", e)
            raise MalformedTokenError("Token is malformed") from e

    def get_claim(self, token: str, resolver: Callable[[dict[str, Any]], T]) -> T:
        """Parse a token without the expiry check and project its claims."""
        return resolver(self.parse_claims(token, verify_exp=False))

    def get_username(self, token: str) -> str | None:
        username = self.get_claim(token, lambda claims: claims.get("username"))
        if username is not None and not isinstance(username, str):
            raise ClaimTypeMismatchError(
                f"username claim must be a string, got {type(username).__name__}"
            )
        return username

    def get_user_id(self, token: str) -> int | None:
        user_id = self.get_claim(token, lambda claims: claims.get("userId"))
        if user_id is not None and (isinstance(user_id, bool) or not isinstance(user_id, int)):
            raise ClaimTypeMismatchError(
                f"userId claim must be an integer, got {type(user_id).__name__}"
            )
        return user_id

    def get_expiration(self, token: str) -> datetime:
        return self.get_claim(token, _expiration_of)

    def is_expired(self, token: str) -> bool:
        return self.get_expiration(token) < datetime.now(UTC)

    def validate(self, token: str) -> bool:
        """Return True if the token is authentic and unexpired. Never raises for bad tokens."""
        try:
            expiration = _expiration_of(self.parse_claims(token))
        except TokenError:
            return False
        return expiration >= datetime.now(UTC)


def _expiration_of(claims: dict[str, Any]) -> datetime:
    exp = claims["exp"]
    if isinstance(exp, bool) or not isinstance(exp, int | float):
        raise ClaimTypeMismatchError(f"exp claim must be numeric, got {type(exp).__name__}")
    try:
        return datetime.fromtimestamp(exp, UTC)
    except (OverflowError, OSError, ValueError) as e:
        raise ClaimTypeMismatchError(f"exp claim is out of range: {exp}") from e
