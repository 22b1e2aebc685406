"""luaconf - Typed configuration reads from embedded Lua scripts."""

from __future__ import annotations

# Session
from luaconf.session import LuaSession

# Value types
from luaconf.types import ReadResult, ReadStatus, ValueKind

# Building blocks
from luaconf.converter import TypeConverter
from luaconf.path import split_path
from luaconf.walker import Cursor, ScopeWalker

# Config
from luaconf.config import Config, SessionSettings

# Diagnostics
from luaconf.diagnostics import DiagnosticLogger

# Errors
from luaconf.errors import (
    ConfigError,
    ConfigNotFoundError,
    ErrorCodes,
    LuaConfError,
    PathNotFoundError,
    ScriptLoadError,
    SessionNotLoadedError,
    TypeMismatchError,
    UnsupportedKindError,
)

__version__ = "0.1.0"

__all__ = [
    # Session
    "LuaSession",
    # Value types
    "ReadResult",
    "ReadStatus",
    "ValueKind",
    # Building blocks
    "TypeConverter",
    "split_path",
    "Cursor",
    "ScopeWalker",
    # Config
    "Config",
    "SessionSettings",
    # Diagnostics
    "DiagnosticLogger",
    # Errors
    "LuaConfError",
    "ConfigError",
    "ConfigNotFoundError",
    "ErrorCodes",
    "PathNotFoundError",
    "ScriptLoadError",
    "SessionNotLoadedError",
    "TypeMismatchError",
    "UnsupportedKindError",
]
