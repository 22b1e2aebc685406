"""Tests for LuaSession list reads."""

from __future__ import annotations

import io
from typing import Callable

import pytest

from luaconf.errors import PathNotFoundError, TypeMismatchError
from luaconf.session import LuaSession
from luaconf.types import ReadStatus


class TestGetList:
    """Test reading tables as lists of one kind."""

    def test_table_values(self, session: LuaSession) -> None:
        """Key order is Lua's own, so compare as a set."""
        assert set(session.get_list("t", int)) == {1, 2, 3}

    def test_sequence(self, session: LuaSession) -> None:
        """A sequence gives all of its elements."""
        assert sorted(session.get_list("primes", int)) == [2, 3, 5, 7]

    def test_nested_path(self, session: LuaSession) -> None:
        """Lists can sit at the end of a dotted path."""
        assert sorted(session.get_list("players.names", str)) == ["ada", "grace"]

    def test_floats_from_mixed_numbers(self, session: LuaSession) -> None:
        """Integer elements widen to float."""
        values = session.get_list("weights", float)
        assert sorted(values) == [1.0, 2.5]
        assert all(isinstance(v, float) for v in values)

    def test_booleans(self, make_session: Callable[..., LuaSession]) -> None:
        """Elements follow Lua truthiness."""
        session = make_session("flags = { true, false, 0 }")
        assert sorted(session.get_list("flags", bool)) == [False, True, True]

    def test_empty_table(self, make_session: Callable[..., LuaSession]) -> None:
        """An empty table is found and gives []."""
        session = make_session("nothing = {}")
        result = session.read_list("nothing", int)
        assert result.value == []
        assert result.status is ReadStatus.FOUND

    def test_numbers_as_strings(self, session: LuaSession) -> None:
        """Numbers are formatted by Lua's tostring."""
        assert sorted(session.get_list("primes", str)) == ["2", "3", "5", "7"]

    def test_invalid_utf8_elements(self, make_session: Callable[..., LuaSession]) -> None:
        """Elements that are not valid text are replaced instead of raising."""
        session = make_session(b'l = { "\\xff", "ok" }')
        result = session.read_list("l", str)
        assert sorted(result.value) == ["ok", "\ufffd"]
        assert result.status is ReadStatus.FOUND
        assert session.stack_depth == 0


class TestListFailures:
    """Test list reads that fail or partly fail."""

    def test_missing_path(self, session: LuaSession, diagnostics_output: io.StringIO) -> None:
        """A missing path gives [] and reports the segment index."""
        result = session.read_list("nope", int)
        assert result.value == []
        assert result.status is ReadStatus.DEFAULT
        assert isinstance(result.error, PathNotFoundError)
        assert "Unable to get nope due to error: 0 is not defined" in diagnostics_output.getvalue()

    def test_missing_path_releases_frames(self, session: LuaSession) -> None:
        """Frames are released when the path is missing."""
        session.get_list("players.nobody", int)
        assert session.stack_depth == 0

    def test_scalar_is_not_a_table(self, session: LuaSession, diagnostics_output: io.StringIO) -> None:
        """A scalar reports Not a table."""
        result = session.read_list("x", int)
        assert result.value == []
        assert result.status is ReadStatus.TYPE_MISMATCH
        assert result.error.actual == "number"
        assert "Not a table" in diagnostics_output.getvalue()

    def test_mixed_elements_keep_coerced_values(
        self, session: LuaSession, diagnostics_output: io.StringIO
    ) -> None:
        """A wrong element is reported once and kept in coerced form."""
        result = session.read_list("mixed", int)
        assert sorted(result.value) == [0, 1, 3]
        assert result.status is ReadStatus.TYPE_MISMATCH
        assert len(result.errors) == 1
        assert isinstance(result.error, TypeMismatchError)
        lines = diagnostics_output.getvalue().splitlines()
        assert len(lines) == 1
        assert "due to error: Not a number" in lines[0]

    def test_tables_as_strings(self, make_session: Callable[..., LuaSession]) -> None:
        """Nested tables read as "null"."""
        session = make_session('rows = { {}, "b" }')
        assert sorted(session.get_list("rows", str)) == ["b", "null"]

    def test_strict_raises(self, make_session: Callable[..., LuaSession]) -> None:
        """Strict mode raises the first element error."""
        session = make_session('mixed = { 1, "two" }', strict=True)
        with pytest.raises(TypeMismatchError):
            session.get_list("mixed", int)
        assert session.stack_depth == 0


class TestListIdempotence:
    """Test that list reads leave the session unchanged."""

    @pytest.mark.parametrize("path", ["t", "primes", "nope", "x"])
    def test_repeated_reads(self, session: LuaSession, path: str) -> None:
        """The same list read twice gives the same values and holds no frames."""
        first = session.get_list(path, int)
        assert session.stack_depth == 0
        second = session.get_list(path, int)
        assert session.stack_depth == 0
        assert first == second
