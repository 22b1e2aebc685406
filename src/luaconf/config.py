"""Configuration loading and validation."""

from __future__ import annotations

import codecs
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from luaconf.errors import ConfigError, ConfigNotFoundError
from luaconf.path import split_path

__all__ = ["Config", "SessionSettings"]


class SessionSettings(BaseModel):
    """Settings shared by every LuaSession built from a Config."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    encoding: str = "utf-8"
    delimiter: str = Field(default=".", min_length=1, max_length=1)
    strict: bool = False
    log_level: Literal["trace", "debug", "info", "warn", "error", "fatal"] = "error"
    log_format: Literal["text", "json"] = "text"

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}") from None
        return v


class Config:
    """Configuration accessor with dot-path key support."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def load(cls, config_path: str | Path) -> Config:
        """Load configuration from a YAML file.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the file is not valid YAML or not a mapping.
        """
        path = Path(config_path)
        if not path.is_file():
            raise ConfigNotFoundError(str(path))

        try:
            data = yaml.safe_load(path.read_text())
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}", cause=exc) from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {path}")
        return cls(data)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        current: Any = self._data
        for part in split_path(key):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    def session_settings(self) -> SessionSettings:
        """Validate the ``session`` section into SessionSettings.

        Raises:
            ConfigError: If the section is not a mapping or fails validation.
        """
        section = self.get("session", {})
        if section is None:
            section = {}
        if not isinstance(section, dict):
            raise ConfigError("'session' must be a mapping")
        try:
            return SessionSettings(**section)
        except ValidationError as exc:
            raise ConfigError(f"Invalid session settings: {exc}", cause=exc) from exc
