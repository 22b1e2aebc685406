"""One-line diagnostics for recoverable read failures."""

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from typing import Any

__all__ = ["DiagnosticLogger", "LEVELS"]

LEVELS = {
    "trace": 0,
    "debug": 10,
    "info": 20,
    "warn": 30,
    "error": 40,
    "fatal": 50,
}


class DiagnosticLogger:
    """Writes one human-readable line per failed read.

    Text lines look like::

        2024-01-01 12:00:00 [ERROR] [session=game.lua] Unable to get a.b due to error: 1 is not defined path=a.b reason=1 is not defined

    The ``json`` format writes the same information as a JSON object per line.
    """

    def __init__(
        self,
        name: str = "luaconf",
        format: str = "text",
        level: str = "error",
        output: Any = None,
    ) -> None:
        self._name = name
        self._format = format
        self._level = level
        self._level_value = LEVELS.get(level, 40)
        self._output = output if output is not None else sys.stderr
        self._session: str | None = None

    def bind(self, session: str) -> DiagnosticLogger:
        """Return a copy that tags every entry with a session name."""
        bound = DiagnosticLogger(
            name=self._name,
            format=self._format,
            level=self._level,
            output=self._output,
        )
        bound._session = session
        return bound

    def _emit(self, level_name: str, message: str, extra: dict[str, Any] | None) -> None:
        level_value = LEVELS.get(level_name, 20)
        if level_value < self._level_value:
            return

        now = datetime.now(timezone.utc)
        if self._format == "json":
            entry = {
                "timestamp": now.isoformat(),
                "level": level_name,
                "message": message,
                "session": self._session,
                "logger": self._name,
                "extra": extra,
            }
            self._output.write(json.dumps(entry, default=str) + "\n")
        else:
            ts = now.strftime("%Y-%m-%d %H:%M:%S")
            session = self._session or "none"
            extras_str = ""
            if extra:
                extras_str = " " + " ".join(f"{k}={v}" for k, v in extra.items())
            self._output.write(
                f"{ts} [{level_name.upper()}] [session={session}] {message}{extras_str}\n"
            )

    def read_failed(self, path: str, reason: str, extra: dict[str, Any] | None = None) -> None:
        """Report that ``path`` could not be read cleanly."""
        entry_extra = {"path": path, "reason": reason}
        if extra:
            entry_extra.update(extra)
        self._emit("error", f"Unable to get {path} due to error: {reason}", entry_extra)

    def debug(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self._emit("debug", message, extra)

    def info(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self._emit("info", message, extra)

    def warn(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self._emit("warn", message, extra)

    def error(self, message: str, extra: dict[str, Any] | None = None) -> None:
        self._emit("error", message, extra)
