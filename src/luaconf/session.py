"""LuaSession: typed configuration reads from a Lua script."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from lupa import LuaRuntime, lua_type

from luaconf.config import SessionSettings
from luaconf.converter import TypeConverter, lua_type_name
from luaconf.diagnostics import DiagnosticLogger
from luaconf.errors import (
    LuaConfError,
    ScriptLoadError,
    SessionNotLoadedError,
    TypeMismatchError,
)
from luaconf.types import KindLike, ReadResult, ReadStatus, ValueKind
from luaconf.walker import ScopeWalker

__all__ = ["LuaSession"]

logger = logging.getLogger(__name__)

_MISSING: Any = object()


class LuaSession:
    """One Lua runtime loaded with one script, read through dotted paths.

    Reads never raise for a missing path, a wrong Lua type or a script that
    failed to load: each such failure writes one diagnostic line and the
    read falls back to a default (``0``, ``0.0``, ``False``, ``"null"`` or
    ``[]``). Use :meth:`read` / :meth:`read_list` to see how a value was
    obtained, or ``strict=True`` to get the error raised instead.

    Not thread-safe: a session must only be used by one thread at a time.

    Example::

        with LuaSession("settings.lua") as session:
            width = session.get("graphics.window.width", int)
            names = session.get_list("players.names", str)
    """

    def __init__(
        self,
        script_name: str | Path,
        *,
        source: str | bytes | None = None,
        settings: SessionSettings | None = None,
        diagnostics: DiagnosticLogger | None = None,
        strict: bool | None = None,
    ) -> None:
        """Create a runtime and run the script in it.

        Args:
            script_name: Path of the Lua script, or a label when ``source``
                is given.
            source: Script text to run instead of reading ``script_name``.
            settings: Session settings, defaults to ``SessionSettings()``.
            diagnostics: Diagnostics sink, defaults to one built from settings.
            strict: Overrides ``settings.strict`` when not None.
        """
        self.name = str(script_name)
        self._settings = settings if settings is not None else SessionSettings()
        self._strict = self._settings.strict if strict is None else strict
        sink = diagnostics or DiagnosticLogger(
            format=self._settings.log_format,
            level=self._settings.log_level,
        )
        self._diagnostics = sink.bind(self.name)
        self._source = source

        self._lua: LuaRuntime | None = None
        self._walker: ScopeWalker | None = None
        self._converter: TypeConverter | None = None
        self.load_error: ScriptLoadError | None = None

        self._load()

    @classmethod
    def from_source(cls, source: str | bytes, name: str = "<string>", **kwargs: Any) -> LuaSession:
        """Create a session from script text rather than a file."""
        return cls(name, source=source, **kwargs)

    # ----- Lifecycle -----

    @property
    def is_script_loaded(self) -> bool:
        return self._lua is not None

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def stack_depth(self) -> int:
        """Frames still held by unreleased cursors; 0 between reads."""
        return self._walker.depth if self._walker is not None else 0

    def _read_script(self) -> bytes:
        if isinstance(self._source, str):
            return self._source.encode(self._settings.encoding)
        if self._source is not None:
            return self._source
        return Path(self.name).read_bytes()

    def _load(self) -> None:
        encoding = self._settings.encoding
        # No runtime encoding: Lua strings come back as bytes and are decoded
        # by the converter, so invalid byte sequences cannot break a read.
        lua = LuaRuntime(
            encoding=None,
            register_eval=False,
            register_builtins=False,
            unpack_returned_tuples=True,
        )
        # Captured before the script runs so it cannot rebind them.
        converter = TypeConverter.from_runtime(lua, encoding)
        try:
            lua.execute(self._read_script())
        except Exception as exc:
            self._fail(ScriptLoadError(self.name, str(exc), cause=exc))
            return

        self._lua = lua
        self._walker = ScopeWalker(lua, delimiter=self._settings.delimiter, encoding=encoding)
        self._converter = converter
        self.load_error = None
        logger.debug("Loaded Lua script %s", self.name)

    def _fail(self, error: ScriptLoadError) -> None:
        self._lua = None
        self._walker = None
        self._converter = None
        self.load_error = error
        self._diagnostics.error(
            f"Error: script not loaded ({self.name})",
            extra={"code": error.code, "reason": error.reason},
        )

    def run_script(self) -> bool:
        """Run the script again.

        A loaded session re-executes the script in its existing runtime, so
        globals the script assigns are refreshed and others are kept. A
        session that failed to load starts over with a fresh runtime. If the
        run fails the session ends up unloaded.

        Returns:
            Whether the session is loaded afterwards.
        """
        if self._lua is None:
            self._load()
            return self.is_script_loaded

        try:
            self._lua.execute(self._read_script())
        except Exception as exc:
            self._fail(ScriptLoadError(self.name, str(exc), cause=exc))
        return self.is_script_loaded

    def close(self) -> None:
        """Release the Lua runtime. Later reads return defaults."""
        if self._lua is not None:
            logger.debug("Closing Lua session %s", self.name)
        self._lua = None
        self._walker = None
        self._converter = None

    def __enter__(self) -> LuaSession:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "loaded" if self.is_script_loaded else "not loaded"
        return f"LuaSession({self.name!r}, {state})"

    # ----- Reads -----

    def _report(self, path: str, error: LuaConfError) -> None:
        extra = {"code": error.code}
        extra.update({k: v for k, v in error.details.items() if k != "path"})
        self._diagnostics.read_failed(path, error.message, extra=extra)

    def read(self, path: str, kind: KindLike, default: Any = _MISSING) -> ReadResult:
        """Read a single value and report where it came from.

        Args:
            path: Dotted path, e.g. ``"graphics.window.width"``.
            kind: ValueKind, one of int/float/bool/str, or a kind name.
            default: Used instead of the built-in default when the script
                is not loaded or the path does not exist.

        Returns:
            ReadResult with the value and its ReadStatus.

        Raises:
            UnsupportedKindError: If kind has no conversion.
        """
        value_kind = ValueKind.coerce(kind)
        fallback = TypeConverter.default_for(value_kind) if default is _MISSING else default

        if self._walker is None or self._converter is None:
            error = SessionNotLoadedError(self.name, path, "get")
            self._report(path, error)
            return ReadResult(path, value_kind, fallback, ReadStatus.NOT_LOADED, [error])

        with self._walker.resolve(path) as cursor:
            if not cursor.found:
                self._report(path, cursor.error)
                return ReadResult(path, value_kind, fallback, ReadStatus.DEFAULT, [cursor.error])
            value = cursor.value
            conversion = self._converter.convert(value_kind, value)

        if conversion.mismatch:
            error = TypeMismatchError(
                path=path,
                reason=conversion.reason,
                expected=value_kind.value,
                actual=lua_type_name(value),
            )
            self._report(path, error)
            return ReadResult(path, value_kind, conversion.value, ReadStatus.TYPE_MISMATCH, [error])
        return ReadResult(path, value_kind, conversion.value)

    def read_list(self, path: str, kind: KindLike) -> ReadResult:
        """Read every value of a table, converted to one kind.

        Values come in the order Lua's ``next`` visits them, which is index
        order for sequences and unspecified for other keys. An element of
        the wrong type is reported and kept in its coerced form.

        Raises:
            UnsupportedKindError: If kind has no conversion.
        """
        value_kind = ValueKind.coerce(kind)

        if self._walker is None or self._converter is None:
            error = SessionNotLoadedError(self.name, path, "get_list")
            self._report(path, error)
            return ReadResult(path, value_kind, [], ReadStatus.NOT_LOADED, [error])

        errors: list[LuaConfError] = []
        items: list[Any] = []
        with self._walker.resolve(path) as cursor:
            if cursor.error is not None:
                errors.append(cursor.error)
                self._report(path, cursor.error)

            table = cursor.value
            if table is None:
                return ReadResult(path, value_kind, [], ReadStatus.DEFAULT, errors)
            if lua_type(table) != "table":
                error = TypeMismatchError(
                    path=path,
                    reason="Not a table",
                    expected="table",
                    actual=lua_type_name(table),
                )
                errors.append(error)
                self._report(path, error)
                return ReadResult(path, value_kind, [], ReadStatus.TYPE_MISMATCH, errors)

            for entry in table.values():
                conversion = self._converter.convert(value_kind, entry)
                if conversion.mismatch:
                    error = TypeMismatchError(
                        path=path,
                        reason=conversion.reason,
                        expected=value_kind.value,
                        actual=lua_type_name(entry),
                    )
                    errors.append(error)
                    self._report(path, error)
                items.append(conversion.value)

        status = ReadStatus.TYPE_MISMATCH if errors else ReadStatus.FOUND
        return ReadResult(path, value_kind, items, status, errors)

    def get(self, path: str, kind: KindLike, default: Any = _MISSING) -> Any:
        """Read a single value, falling back to a default on failure.

        In strict mode the first error is raised instead.
        """
        result = self.read(path, kind, default)
        if self._strict:
            return result.unwrap()
        return result.value

    def get_list(self, path: str, kind: KindLike) -> list[Any]:
        """Read a table as a list of one kind, ``[]`` on failure."""
        result = self.read_list(path, kind)
        if self._strict:
            return result.unwrap()
        return result.value

    def get_int(self, path: str, default: Any = _MISSING) -> Any:
        return self.get(path, ValueKind.INTEGER, default)

    def get_float(self, path: str, default: Any = _MISSING) -> Any:
        return self.get(path, ValueKind.FLOAT, default)

    def get_bool(self, path: str, default: Any = _MISSING) -> Any:
        return self.get(path, ValueKind.BOOLEAN, default)

    def get_str(self, path: str, default: Any = _MISSING) -> Any:
        return self.get(path, ValueKind.STRING, default)
