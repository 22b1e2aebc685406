"""Path resolution against the globals of a Lua runtime."""

from __future__ import annotations

import logging
from typing import Any

from lupa import LuaError, lua_type

from luaconf.errors import PathNotFoundError
from luaconf.path import split_path

__all__ = ["Cursor", "ScopeWalker"]

logger = logging.getLogger(__name__)


class Cursor:
    """Handle to the value at the end of a resolved path.

    Holds one frame per segment that was looked up, the failing one included.
    Frames are only meaningful until :meth:`release`, which the ``with``
    statement calls on exit whether or not the block raised.
    """

    def __init__(self, walker: ScopeWalker, path: str, segments: list[str]) -> None:
        self.path = path
        self.segments = segments
        self.frames: list[Any] = []
        self.error: PathNotFoundError | None = None
        self._walker = walker
        self._released = False

    @property
    def found(self) -> bool:
        return self.error is None and len(self.frames) == len(self.segments)

    @property
    def value(self) -> Any:
        """The value on top of the cursor, ``None`` for nil."""
        return self.frames[-1] if self.frames else None

    def push(self, value: Any) -> None:
        self.frames.append(value)
        self._walker._depth += 1

    def release(self) -> None:
        if self._released:
            return
        self._walker._depth -= len(self.frames)
        self.frames.clear()
        self._released = True

    def __enter__(self) -> Cursor:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()


class ScopeWalker:
    """Resolves dotted paths to Lua values.

    The first segment is a global; each later segment is a field of the
    value before it. Resolution stops at the first segment that is nil.
    Segments are encoded with ``encoding`` before they reach Lua, so the
    runtime may be created without an encoding of its own.
    """

    def __init__(self, lua: Any, delimiter: str = ".", encoding: str = "utf-8") -> None:
        self._globals = lua.globals()
        # Indexing through a Lua function runs under a protected call, so
        # failing __index metamethods surface as LuaError.
        self._index = lua.eval(b"function(t, k) return t[k] end")
        self._delimiter = delimiter
        self._encoding = encoding
        self._depth = 0

    @property
    def depth(self) -> int:
        """Frames held by cursors that have not been released yet."""
        return self._depth

    def resolve(self, path: str) -> Cursor:
        segments = split_path(path, self._delimiter)
        cursor = Cursor(self, path, segments)

        current = self._globals
        try:
            for index, segment in enumerate(segments):
                current = self._field(current, segment)
                cursor.push(current)
                if current is None:
                    cursor.error = PathNotFoundError(path=path, index=index, segment=segment)
                    break
        except BaseException:
            cursor.release()
            raise
        return cursor

    def _field(self, container: Any, name: str) -> Any:
        # Only tables can be indexed; anything else reads as nil.
        if lua_type(container) != "table":
            return None
        try:
            key = name.encode(self._encoding)
        except UnicodeEncodeError:
            # No Lua string can hold this key in the session encoding.
            return None
        try:
            return self._index(container, key)
        except LuaError as exc:
            logger.debug("Indexing field %r raised a Lua error: %s", name, exc)
            return None
