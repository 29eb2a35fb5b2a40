"""Shared fixtures for the gplot test suite.

gnuplot itself is never run: ``fake_gnuplot`` replaces ``subprocess.run``
and records every command together with the script it was given.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import pytest

from gplot.config import PlotConfig


@dataclass
class FakeGnuplot:
    returncode: int = 0
    error: BaseException | None = None
    on_run: Callable[[], None] | None = None
    calls: list[list[str]] = field(default_factory=list)
    scripts: list[str] = field(default_factory=list)

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        self.scripts.append(Path(cmd[-1]).read_text(encoding="utf-8"))
        if self.on_run is not None:
            self.on_run()
        if self.error is not None:
            raise self.error
        return subprocess.CompletedProcess(cmd, self.returncode)

    @property
    def script_paths(self) -> list[Path]:
        return [Path(cmd[-1]) for cmd in self.calls]


@pytest.fixture
def fake_gnuplot(monkeypatch) -> FakeGnuplot:
    fake = FakeGnuplot()
    monkeypatch.setattr("gplot.engine.subprocess.run", fake)
    return fake


@pytest.fixture
def make_config():
    """Build a :class:`PlotConfig` with ``a.dat`` as the default pattern."""

    def _make(**kwargs) -> PlotConfig:
        kwargs.setdefault("pattern", "a.dat")
        return PlotConfig(**kwargs)

    return _make


@pytest.fixture
def data_dir(tmp_path, monkeypatch) -> Path:
    """A working directory holding three small data files."""
    for name in ("a.dat", "b.dat", "c.dat"):
        (tmp_path / name).write_text("x y\n1 2\n2 4\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("GPLOT_GNUPLOT", "GPLOT_TERMINAL", "GPLOT_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
