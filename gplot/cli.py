# Copyright (c) 2025 Daniele De Sensi e Saverio Pasqualoni
# Licensed under the MIT License

from __future__ import annotations

import argparse
import logging
import shlex
import signal
import sys
from datetime import datetime
from typing import Sequence

from .config import EPS_TERMINAL, INTERACTIVE_PAUSE, PNG_TERMINAL, EngineSettings, PlotConfig, replot_pause
from .engine import EngineError, run_engine
from .files import expand_files
from .script import quote_path, render_script, save_script

logger = logging.getLogger(__name__)

# Short options without and with a value.
SWITCH_FLAGS = frozenset("3cghilrLS")
VALUE_FLAGS = frozenset("efpstxyzFXYZ")

OUTPUT_PREFIX = "set output "

EPILOG = """\
The first positional argument is a file pattern (quote it to keep the shell
from expanding it). Any further arguments are appended to every plot clause,
for example:

  gplot -g -t 'Run 3' 'results/*.dat' using 1:3 with linespoints
  gplot -3 -X 0:10 -p surface.png grid.dat with pm3d
"""


def _append_directive(namespace: argparse.Namespace, line: str) -> None:
    directives = list(getattr(namespace, "directives", None) or [])
    directives.append(line)
    namespace.directives = directives


class _SettingAction(argparse.Action):
    """Record a fixed setting line, e.g. ``set grid``."""

    def __init__(self, option_strings, dest, line: str, **kwargs):
        self.line = line
        super().__init__(option_strings, dest, nargs=0, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        _append_directive(namespace, self.line)


class _TemplateAction(argparse.Action):
    """Record a setting line with the flag value substituted verbatim."""

    def __init__(self, option_strings, dest, template: str, **kwargs):
        self.template = template
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        _append_directive(namespace, self.template.format(values))


class _OutputAction(argparse.Action):
    """
    Switch to a file terminal. Clears any pause requested so far and replaces
    an earlier output line, so only one output file is ever opened.
    """

    def __init__(self, option_strings, dest, terminal: str, **kwargs):
        self.terminal = terminal
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        namespace.terminal = self.terminal
        namespace.output = values
        namespace.pause = None
        directives = [line for line in namespace.directives or () if not line.startswith(OUTPUT_PREFIX)]
        directives.append(f"{OUTPUT_PREFIX}{quote_path(values)}")
        namespace.directives = directives


class _PauseAction(argparse.Action):
    def __init__(self, option_strings, dest, **kwargs):
        kwargs.setdefault("nargs", 0)
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        namespace.pause = INTERACTIVE_PAUSE if self.nargs == 0 else replot_pause(values)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gplot",
        description="Plot data files with gnuplot from the command line.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.set_defaults(directives=None, terminal=None, output=None, pause=None)

    parser.add_argument("-3", dest="command", action="store_const", const="splot", default="plot", help="3D plot (splot).")
    parser.add_argument("-c", dest="autotitle", action="store_true", help="Autotitle the series (column headers for a single 2D file).")
    parser.add_argument("-e", metavar="FILE", action=_OutputAction, terminal=EPS_TERMINAL, help="Write EPS output to FILE.")
    parser.add_argument("-f", dest="for_expr", metavar="FOREXPR", help="Prefix every plot clause with 'for [FOREXPR]'.")
    parser.add_argument("-g", action=_SettingAction, line="set grid", help="Draw a grid.")
    parser.add_argument("-i", action=_PauseAction, help="Keep the window open until it is closed.")
    parser.add_argument("-l", action=_SettingAction, line="set logscale y", help="Logarithmic y axis.")
    parser.add_argument("-p", metavar="FILE", action=_OutputAction, terminal=PNG_TERMINAL, help="Write PNG output to FILE.")
    parser.add_argument("-r", dest="raise_window", action="store_true", help="Raise the plot window.")
    parser.add_argument("-s", dest="save_path", metavar="FILE", help="Save the generated script to FILE.")
    parser.add_argument("-t", metavar="TITLE", action=_TemplateAction, template='set title "{}"', help="Plot title.")
    parser.add_argument("-x", metavar="LABEL", action=_TemplateAction, template='set xlabel "{}"', help="x axis label.")
    parser.add_argument("-y", metavar="LABEL", action=_TemplateAction, template='set ylabel "{}"', help="y axis label.")
    parser.add_argument("-z", metavar="LABEL", action=_TemplateAction, template='set zlabel "{}"', help="z axis label.")
    parser.add_argument("-F", metavar="FREQUENCY", action=_PauseAction, nargs=None, help="Replot every FREQUENCY seconds.")
    parser.add_argument("-L", action=_SettingAction, line="set logscale x", help="Logarithmic x axis.")
    parser.add_argument("-S", dest="read_stdin", action="store_true", help="Read extra gnuplot commands from standard input.")
    parser.add_argument("-X", metavar="LOW:HIGH", action=_TemplateAction, template="set xrange [{}]", help="x axis range.")
    parser.add_argument("-Y", metavar="LOW:HIGH", action=_TemplateAction, template="set yrange [{}]", help="y axis range.")
    parser.add_argument("-Z", metavar="LOW:HIGH", action=_TemplateAction, template="set zrange [{}]", help="z axis range.")

    parser.add_argument("pattern", help="File pattern to plot.")
    parser.add_argument("plot_args", nargs=argparse.REMAINDER, help="Appended to every plot clause (using, with, ...).")
    return parser


def _split_flags(argv: Sequence[str]) -> list[str]:
    """
    Rewrite the leading flags getopts style: clusters such as ``-gl3`` are
    split into one token per letter, letters that are not known flags are
    dropped, and a value flag takes the rest of its token or the next token
    as its value (``-X -5:5`` and ``-X-5:5`` both work).
    """
    args = list(argv)
    out: list[str] = []
    i = 0
    while i < len(args):
        token = args[i]
        i += 1
        if token == "--" or token == "-" or not token.startswith("-"):
            out.append(token)
            out.extend(args[i:])
            break
        if token.startswith("--"):
            out.append(token)
            continue
        for idx, char in enumerate(token[1:], start=1):
            if char in SWITCH_FLAGS:
                out.append(f"-{char}")
                continue
            if char not in VALUE_FLAGS:
                logger.debug("Ignoring unknown flag -%s", char)
                continue
            value = token[idx + 1 :]
            if not value and i < len(args):
                value = args[i]
                i += 1
            elif not value:
                out.append(f"-{char}")
                break
            if value.startswith("-"):
                out.append(f"-{char}{value}")
            else:
                out.extend([f"-{char}", value])
            break
    return out


def parse_config(argv: Sequence[str], parser: argparse.ArgumentParser | None = None) -> PlotConfig:
    """
    Fold ``argv`` into a :class:`PlotConfig`. Unknown flags are ignored.
    """
    parser = parser or build_parser()
    args, unknown = parser.parse_known_args(_split_flags(argv))
    if unknown:
        logger.debug("Ignoring unknown arguments: %s", " ".join(unknown))
    return PlotConfig.from_namespace(args)


def window_title(argv: Sequence[str], now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"{now:%H:%M:%S} {shlex.join(['gplot', *argv])}"


def _terminate(signum, _frame):
    raise SystemExit(128 + signum)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    settings = EngineSettings.from_env()
    level = logging.getLevelName(settings.log_level)
    logging.basicConfig(
        level=level if isinstance(level, int) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    parser = build_parser()
    config = parse_config(argv, parser)
    files = expand_files(config.pattern)
    stdin_text = sys.stdin.read() if config.read_stdin else None
    script = render_script(
        config,
        files,
        stdin_text=stdin_text,
        window_title=window_title(argv),
        interactive_terminal=settings.terminal,
    )

    if config.save_path:
        try:
            saved = save_script(script, config.save_path)
        except OSError as exc:
            parser.error(f"cannot save script to {config.save_path}: {exc.strerror or exc}")
        logger.info("Saved script to %s", saved)

    previous = signal.signal(signal.SIGTERM, _terminate)
    try:
        return run_engine(script, executable=settings.executable, raise_window=config.raise_window)
    except EngineError as exc:
        print(f"gplot: {exc}", file=sys.stderr)
        return 127
    except KeyboardInterrupt:
        return 130
    finally:
        signal.signal(signal.SIGTERM, previous)


if __name__ == "__main__":
    raise SystemExit(main())
