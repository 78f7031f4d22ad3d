"""Generic API response envelope."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Status code, payload and message returned to API callers."""

    code: int
    data: T | None = None
    message: str = ""

    @classmethod
    def ok(cls, data: T | None = None, message: str = "success") -> ApiResponse[T]:
        return cls(code=200, data=data, message=message)

    @classmethod
    def error(cls, code: int, message: str) -> ApiResponse[T]:
        return cls(code=code, data=None, message=message)
