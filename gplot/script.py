# Copyright (c) 2025 Daniele De Sensi e Saverio Pasqualoni
# Licensed under the MIT License

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .config import DEFAULT_TERMINAL, PlotConfig

INTERPRETER_MARKER = "#!/usr/bin/env gnuplot"


@dataclass(frozen=True, slots=True)
class GeneratedScript:
    """
    A rendered gnuplot script.

    The pause lines are kept apart from the body so that a saved copy can be
    written without them.
    """

    body: tuple[str, ...]
    pause: tuple[str, ...] = ()

    @property
    def lines(self) -> tuple[str, ...]:
        return self.body + self.pause

    def text(self) -> str:
        return "\n".join(self.lines) + "\n"

    def standalone_text(self) -> str:
        return "\n".join((INTERPRETER_MARKER, *self.body)) + "\n"


def quote_path(path: str) -> str:
    """
    Quote ``path`` as a gnuplot single-quoted string.
    """
    return "'" + path.replace("'", "''") + "'"


def _double_quoted(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def terminal_line(config: PlotConfig, *, window_title: str = "", interactive_terminal: str = DEFAULT_TERMINAL) -> str:
    if config.terminal is not None:
        return f"set terminal {config.terminal}"
    return f"set terminal {interactive_terminal} title {_double_quoted(window_title)} noenhanced persist"


def autotitle_line(config: PlotConfig, file_count: int) -> str:
    if not config.autotitle:
        return "set key noautotitle"
    if file_count == 1 and config.command == "plot":
        return "set key autotitle columnheader"
    return "set key autotitle"


def plot_statement(config: PlotConfig, files: Sequence[str]) -> list[str]:
    """
    Build the ``plot``/``splot`` command, one clause per file, as a single
    logical line split with continuation backslashes.
    """
    if not files:
        raise ValueError("At least one input file is required to build a plot statement.")

    trailing = " ".join(config.plot_args)
    clauses = []
    for path in files:
        parts = []
        if config.for_expr is not None:
            parts.append(f"for [{config.for_expr}]")
        parts.append(quote_path(path))
        if trailing:
            parts.append(trailing)
        clauses.append(" ".join(parts))

    lines = [f"{config.command} \\"]
    lines.extend(f"    {clause}, \\" for clause in clauses[:-1])
    lines.append(f"    {clauses[-1]}")
    return lines


def render_script(
    config: PlotConfig,
    files: Sequence[str],
    *,
    stdin_text: str | None = None,
    window_title: str = "",
    interactive_terminal: str = DEFAULT_TERMINAL,
) -> GeneratedScript:
    """
    Render the script for ``config`` and ``files``.

    Order: terminal, setting directives in the order given, key autotitle
    mode, ``stdin_text`` (only when reading standard input was requested),
    then the plot statement. Pause lines, if any, go in ``pause``.
    """
    body = [terminal_line(config, window_title=window_title, interactive_terminal=interactive_terminal)]
    body.extend(config.directives)
    body.append(autotitle_line(config, len(files)))
    if config.read_stdin and stdin_text:
        body.extend(stdin_text.splitlines())
    body.extend(plot_statement(config, files))
    return GeneratedScript(body=tuple(body), pause=tuple(config.pause or ()))


def save_script(script: GeneratedScript, path: str | Path) -> Path:
    """
    Write ``script`` as a standalone executable gnuplot script (no pause
    lines) and return its path.
    """
    out_path = Path(path)
    if out_path.parent != Path("."):
        out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8", newline="\n") as f:
        f.write(script.standalone_text())

    mode = os.stat(out_path).st_mode
    os.chmod(out_path, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return out_path
