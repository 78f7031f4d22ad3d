"""tokenkit data models."""

from tokenkit.models.claims import TokenClaims
from tokenkit.models.response import ApiResponse

__all__ = ["ApiResponse", "TokenClaims"]
