"""tokenkit configuration management."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from tokenkit.auth.errors import ConfigurationError

DEFAULT_EXPIRATION_MS = 86_400_000


def _default_config_file() -> Path:
    return Path.home() / ".tokenkit" / "config.yaml"


def _coerce(name: str, expected_type: type, value: Any) -> Any:
    try:
        return expected_type(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"{name} must be {expected_type.__name__}, got {value!r}"
        ) from e


@dataclass
class Config:
    """tokenkit configuration."""

    jwt_secret: str = ""
    jwt_expiration_ms: int = DEFAULT_EXPIRATION_MS
    log_level: str = "INFO"
    config_file: Path = field(default_factory=_default_config_file)

    @classmethod
    def load(cls, config_file: Path | None = None) -> Config:
        """Load config from defaults, then the YAML file, then env vars."""
        config = cls()

        env_file = os.environ.get("TOKENKIT_CONFIG")
        if config_file:
            config.config_file = config_file
        elif env_file:
            config.config_file = Path(env_file)

        if config.config_file.exists():
            with open(config.config_file) as f:
                data = yaml.safe_load(f) or {}
            config._apply(data)

        env_secret = os.environ.get("TOKENKIT_JWT_SECRET")
        if env_secret:
            config.jwt_secret = env_secret

        env_expiration = os.environ.get("TOKENKIT_JWT_EXPIRATION_MS")
        if env_expiration:
            config.jwt_expiration_ms = _coerce("TOKENKIT_JWT_EXPIRATION_MS", int, env_expiration)

        env_log = os.environ.get("TOKENKIT_LOG_LEVEL")
        if env_log:
            config.log_level = env_log

        config.check()
        return config

    def _apply(self, data: dict[str, Any]) -> None:
        # Accepts nested "jwt: {secret, expiration}" or flat field names.
        # A key with no value (YAML null) leaves the default in place.
        jwt_section = data.get("jwt")
        if isinstance(jwt_section, dict):
            if jwt_section.get("secret") is not None:
                self.jwt_secret = str(jwt_section["secret"])
            if jwt_section.get("expiration") is not None:
                self.jwt_expiration_ms = _coerce("jwt.expiration", int, jwt_section["expiration"])

        for key, value in data.items():
            if key in ("jwt", "config_file") or not hasattr(self, key) or value is None:
                continue
            expected_type = type(getattr(self, key))
            setattr(self, key, _coerce(key, expected_type, value))

    def check(self) -> None:
        """Reject values the token service cannot work with."""
        if self.jwt_expiration_ms <= 0:
            raise ConfigurationError(
                f"jwt expiration must be positive, got {self.jwt_expiration_ms}"
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigurationError(f"unknown log level {self.log_level!r}")

    def save(self) -> None:
        """Save current config to YAML. The secret is never written."""
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "jwt": {"expiration": self.jwt_expiration_ms},
            "log_level": self.log_level,
        }
        with open(self.config_file, "w") as f:
            yaml.dump(data, f, default_flow_style=False)
