"""Shared test fixtures for the luaconf test suite."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Callable

import pytest

from luaconf.diagnostics import DiagnosticLogger
from luaconf.session import LuaSession


# === Scripts ===


SETTINGS_SCRIPT = """
x = 42
ratio = 1.5
negative = -2.7
name = "hello"
numeric_string = "42"
hex_string = "0x10"
flag = false
zero = 0
empty = ""
nan = 0/0
huge = math.huge

graphics = {
  window = { width = 1280, height = 720, fullscreen = true, title = "Demo" },
}

t = { a = 1, b = 2, c = 3 }
primes = { 2, 3, 5, 7 }
mixed = { 1, "two", 3 }
weights = { 1, 2.5 }
players = { names = { "ada", "grace" } }
"""


# === Fixtures ===


@pytest.fixture
def diagnostics_output() -> io.StringIO:
    """Buffer that receives every diagnostic line."""
    return io.StringIO()


@pytest.fixture
def diagnostics(diagnostics_output: io.StringIO) -> DiagnosticLogger:
    """Text-format diagnostics writing into diagnostics_output."""
    return DiagnosticLogger(output=diagnostics_output)


@pytest.fixture
def write_script(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing Lua source into tmp_path and returning its path."""

    def factory(source: str, filename: str = "settings.lua") -> Path:
        script = tmp_path / filename
        script.write_text(source)
        return script

    return factory


@pytest.fixture
def make_session(diagnostics: DiagnosticLogger) -> Callable[..., LuaSession]:
    """Factory building a session from Lua source with captured diagnostics."""

    def factory(source: str, **kwargs: Any) -> LuaSession:
        kwargs.setdefault("diagnostics", diagnostics)
        return LuaSession.from_source(source, name="test.lua", **kwargs)

    return factory


@pytest.fixture
def session(make_session: Callable[..., LuaSession]) -> LuaSession:
    """Loaded session running SETTINGS_SCRIPT."""
    return make_session(SETTINGS_SCRIPT)
