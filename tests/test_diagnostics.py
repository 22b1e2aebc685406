"""Tests for DiagnosticLogger."""

from __future__ import annotations

import io
import json

from luaconf.diagnostics import DiagnosticLogger


class TestTextFormat:
    """Test text output."""

    def test_read_failed_line(self) -> None:
        """A failed read writes one line with the message and its fields."""
        buf = io.StringIO()
        logger = DiagnosticLogger(output=buf).bind("game.lua")
        logger.read_failed("a.b", "1 is not defined")
        line = buf.getvalue()
        assert "[ERROR] [session=game.lua] Unable to get a.b due to error: 1 is not defined" in line
        assert line.endswith(" path=a.b reason=1 is not defined\n")
        assert line.count("\n") == 1

    def test_extra_appended_as_pairs(self) -> None:
        """Extra fields follow the message as key=value pairs."""
        buf = io.StringIO()
        logger = DiagnosticLogger(output=buf).bind("game.lua")
        logger.read_failed("x", "Not a number", extra={"code": "TYPE_MISMATCH", "expected": "integer"})
        line = buf.getvalue()
        assert line.endswith(
            "Unable to get x due to error: Not a number"
            " path=x reason=Not a number code=TYPE_MISMATCH expected=integer\n"
        )

    def test_no_extra(self) -> None:
        """Without extra fields the line ends with the message."""
        buf = io.StringIO()
        DiagnosticLogger(output=buf).error("plain")
        assert buf.getvalue().endswith("] plain\n")

    def test_unbound_session(self) -> None:
        """An unbound logger tags entries with session=none."""
        buf = io.StringIO()
        DiagnosticLogger(output=buf).error("oops")
        assert "[session=none] oops" in buf.getvalue()


class TestJsonFormat:
    """Test JSON output."""

    def test_entry_fields(self) -> None:
        """Each entry carries level, logger, session, message and extra."""
        buf = io.StringIO()
        logger = DiagnosticLogger(name="cfg", format="json", output=buf).bind("game.lua")
        logger.read_failed("x", "Not a number", extra={"code": "TYPE_MISMATCH"})
        entry = json.loads(buf.getvalue())
        assert entry["level"] == "error"
        assert entry["logger"] == "cfg"
        assert entry["session"] == "game.lua"
        assert entry["message"] == "Unable to get x due to error: Not a number"
        assert entry["extra"] == {"path": "x", "reason": "Not a number", "code": "TYPE_MISMATCH"}


class TestLevels:
    """Test level filtering."""

    def test_below_level_suppressed(self) -> None:
        """Entries below the level are dropped."""
        buf = io.StringIO()
        logger = DiagnosticLogger(level="error", output=buf)
        logger.debug("hidden")
        logger.info("hidden")
        logger.warn("hidden")
        assert buf.getvalue() == ""

    def test_at_or_above_level_emitted(self) -> None:
        """Entries at or above the level are written."""
        buf = io.StringIO()
        logger = DiagnosticLogger(level="debug", output=buf)
        logger.debug("shown")
        logger.warn("shown")
        assert buf.getvalue().count("shown") == 2

    def test_bind_keeps_settings(self) -> None:
        """A bound copy keeps the level of the original."""
        buf = io.StringIO()
        logger = DiagnosticLogger(level="fatal", output=buf).bind("s")
        logger.read_failed("x", "reason")
        assert buf.getvalue() == ""
