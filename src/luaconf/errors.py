"""Error hierarchy for luaconf."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "LuaConfError",
    "ConfigNotFoundError",
    "ConfigError",
    "SessionNotLoadedError",
    "ScriptLoadError",
    "PathNotFoundError",
    "TypeMismatchError",
    "UnsupportedKindError",
    "ErrorCodes",
]


class LuaConfError(Exception):
    """Base error for all luaconf errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(LuaConfError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(LuaConfError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class ScriptLoadError(LuaConfError):
    """A script could not be read, compiled or executed."""

    def __init__(self, script_name: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="SCRIPT_LOAD_ERROR",
            message=f"Script not loaded ({script_name}): {reason}",
            details={"script_name": script_name, "reason": reason},
            **kwargs,
        )

    @property
    def script_name(self) -> str:
        return self.details["script_name"]

    @property
    def reason(self) -> str:
        return self.details["reason"]


class SessionNotLoadedError(LuaConfError):
    """A read was attempted on a session whose script failed to load."""

    def __init__(self, script_name: str, path: str, operation: str, **kwargs: Any) -> None:
        super().__init__(
            code="SESSION_NOT_LOADED",
            message=f"Script was not loaded, {operation}() failed",
            details={"script_name": script_name, "path": path, "operation": operation},
            **kwargs,
        )

    @property
    def path(self) -> str:
        return self.details["path"]


class PathNotFoundError(LuaConfError):
    """A segment of a dotted path resolved to nil.

    The message names the segment by index only; the segment itself is
    kept in ``details["segment"]``.
    """

    def __init__(self, path: str, index: int, segment: str, **kwargs: Any) -> None:
        super().__init__(
            code="PATH_NOT_FOUND",
            message=f"{index} is not defined",
            details={"path": path, "index": index, "segment": segment},
            **kwargs,
        )

    @property
    def path(self) -> str:
        return self.details["path"]

    @property
    def index(self) -> int:
        return self.details["index"]

    @property
    def segment(self) -> str:
        return self.details["segment"]


class TypeMismatchError(LuaConfError):
    """The value at a path has the wrong Lua type for the requested kind."""

    def __init__(
        self,
        path: str,
        reason: str,
        expected: str,
        actual: str,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            code="TYPE_MISMATCH",
            message=reason,
            details={"path": path, "expected": expected, "actual": actual},
            **kwargs,
        )

    @property
    def path(self) -> str:
        return self.details["path"]

    @property
    def expected(self) -> str:
        return self.details["expected"]

    @property
    def actual(self) -> str:
        return self.details["actual"]


class UnsupportedKindError(LuaConfError):
    """Raised when a read asks for a type that has no conversion."""

    def __init__(self, kind: Any, **kwargs: Any) -> None:
        super().__init__(
            code="UNSUPPORTED_KIND",
            message=f"Unsupported value kind: {kind!r}",
            details={"kind": repr(kind)},
            **kwargs,
        )


class ErrorCodes:
    """All luaconf error codes as constants.

    Example:
        result = session.read("window.width", int)
        if result.error and result.error.code == ErrorCodes.PATH_NOT_FOUND:
            use_fallback()
    """

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    SCRIPT_LOAD_ERROR = "SCRIPT_LOAD_ERROR"
    SESSION_NOT_LOADED = "SESSION_NOT_LOADED"
    PATH_NOT_FOUND = "PATH_NOT_FOUND"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    UNSUPPORTED_KIND = "UNSUPPORTED_KIND"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
