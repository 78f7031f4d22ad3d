"""Shared test fixtures for tokenkit."""

from __future__ import annotations

from pathlib import Path

import pytest

from tokenkit.auth.jwt import TokenService

SECRET = "01234567890123456789012345678901"
OTHER_SECRET = "abcdefghijabcdefghijabcdefghij-other"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the developer's environment and ~/.tokenkit out of tests."""
    for name in ("TOKENKIT_JWT_SECRET", "TOKENKIT_JWT_EXPIRATION_MS", "TOKENKIT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TOKENKIT_CONFIG", str(tmp_path / "missing.yaml"))


@pytest.fixture
def service() -> TokenService:
    return TokenService(SECRET, expiration_ms=86_400_000)


@pytest.fixture
def other_service() -> TokenService:
    return TokenService(OTHER_SECRET)
