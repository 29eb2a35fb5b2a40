# Copyright (c) 2025 Daniele De Sensi e Saverio Pasqualoni
# Licensed under the MIT License

from __future__ import annotations

import os
from dataclasses import dataclass

EPS_TERMINAL = "postscript eps enhanced color"
PNG_TERMINAL = "png"
INTERACTIVE_PAUSE = ("pause mouse close",)

DEFAULT_EXECUTABLE = "gnuplot"
DEFAULT_TERMINAL = "x11"
DEFAULT_LOG_LEVEL = "WARNING"


def replot_pause(frequency: str) -> tuple[str, ...]:
    """
    Pause lines that redraw the plot every ``frequency`` seconds until the
    window is closed or gnuplot is interrupted. Needs gnuplot 4.6 or later.
    """
    return ("while (1) {", f"    pause {frequency}", "    replot", "}")


@dataclass(frozen=True, slots=True)
class PlotConfig:
    """
    Everything the command line asked for, in one immutable record.

    ``directives`` keeps the setting lines (grid, logscale, output, title,
    labels, ranges) in the order their flags were given. The remaining
    fields are single valued and hold the last value given.
    """

    pattern: str
    plot_args: tuple[str, ...] = ()
    command: str = "plot"
    autotitle: bool = False
    terminal: str | None = None
    output: str | None = None
    for_expr: str | None = None
    save_path: str | None = None
    pause: tuple[str, ...] | None = None
    raise_window: bool = False
    read_stdin: bool = False
    directives: tuple[str, ...] = ()

    @property
    def interactive(self) -> bool:
        return self.terminal is None

    @classmethod
    def from_namespace(cls, args) -> "PlotConfig":
        return cls(
            pattern=args.pattern,
            plot_args=tuple(args.plot_args or ()),
            command=args.command,
            autotitle=args.autotitle,
            terminal=args.terminal,
            output=args.output,
            for_expr=args.for_expr,
            save_path=args.save_path,
            pause=args.pause,
            raise_window=args.raise_window,
            read_stdin=args.read_stdin,
            directives=tuple(args.directives or ()),
        )


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """
    Settings read from the environment rather than the command line.
    """

    executable: str = DEFAULT_EXECUTABLE
    terminal: str = DEFAULT_TERMINAL
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ=None) -> "EngineSettings":
        env = os.environ if environ is None else environ
        return cls(
            executable=env.get("GPLOT_GNUPLOT") or DEFAULT_EXECUTABLE,
            terminal=env.get("GPLOT_TERMINAL") or DEFAULT_TERMINAL,
            log_level=(env.get("GPLOT_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )
