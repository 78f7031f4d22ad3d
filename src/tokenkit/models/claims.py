"""Claim set embedded in issued tokens."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TokenClaims(BaseModel):
    """Identity and timing claims carried by a token."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    user_id: int = Field(alias="userId")
    username: str
    issued_at: datetime = Field(default_factory=lambda: datetime.now(UTC), alias="iat")
    expiration: datetime = Field(alias="exp")

    def to_payload(self) -> dict[str, Any]:
        """Wire form: camelCase identity claims, epoch-second timestamps."""
        return {
            "userId": self.user_id,
            "username": self.username,
            "iat": int(self.issued_at.timestamp()),
            "exp": int(self.expiration.timestamp()),
        }
