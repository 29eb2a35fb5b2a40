"""Tests for running gnuplot on a generated script."""

from __future__ import annotations

import pytest

from gplot.engine import EngineError, build_command, run_engine
from gplot.script import GeneratedScript

SCRIPT = GeneratedScript(body=("set grid", "plot \\", "    'a.dat'"), pause=("pause mouse close",))


def test_build_command():
    assert build_command("/tmp/x.gp") == ["gnuplot", "/tmp/x.gp"]
    assert build_command("/tmp/x.gp", executable="gp5", raise_window=True) == ["gp5", "-raise", "/tmp/x.gp"]


def test_full_script_is_passed(fake_gnuplot, capsys):
    assert run_engine(SCRIPT) == 0
    assert fake_gnuplot.scripts == [SCRIPT.text()]
    assert capsys.readouterr().err == ""


def test_temporary_files_are_removed(fake_gnuplot):
    run_engine(SCRIPT)
    path = fake_gnuplot.script_paths[0]
    assert not path.exists()
    assert not path.parent.exists()


def test_failure_dumps_script(fake_gnuplot, capsys):
    fake_gnuplot.returncode = 1
    assert run_engine(SCRIPT) == 1
    assert SCRIPT.text() in capsys.readouterr().err


def test_missing_executable(fake_gnuplot):
    fake_gnuplot.error = FileNotFoundError(2, "No such file or directory")
    with pytest.raises(EngineError, match="gnuplot"):
        run_engine(SCRIPT)
    assert not fake_gnuplot.script_paths[0].parent.exists()


def test_interrupt_still_cleans_up(fake_gnuplot):
    fake_gnuplot.error = KeyboardInterrupt()
    with pytest.raises(KeyboardInterrupt):
        run_engine(SCRIPT)
    assert not fake_gnuplot.script_paths[0].parent.exists()
