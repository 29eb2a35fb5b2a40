# Copyright (c) 2025 Daniele De Sensi e Saverio Pasqualoni
# Licensed under the MIT License

from __future__ import annotations

import logging
import subprocess
import sys
import tempfile
from pathlib import Path

from .config import DEFAULT_EXECUTABLE
from .script import GeneratedScript

logger = logging.getLogger(__name__)

SCRIPT_NAME = "plot.gp"


class EngineError(RuntimeError):
    """Raised when gnuplot cannot be started at all."""


def build_command(script_path: str | Path, *, executable: str = DEFAULT_EXECUTABLE, raise_window: bool = False) -> list[str]:
    cmd = [executable]
    if raise_window:
        cmd.append("-raise")
    cmd.append(str(script_path))
    return cmd


def run_engine(
    script: GeneratedScript,
    *,
    executable: str = DEFAULT_EXECUTABLE,
    raise_window: bool = False,
) -> int:
    """
    Run gnuplot on ``script`` and return its exit code.

    The script lives in a temporary directory that is removed once gnuplot
    returns, fails, or the wait is interrupted. On a non-zero exit the
    script is printed to stderr.
    """
    with tempfile.TemporaryDirectory(prefix="gplot-") as tmpdir:
        script_path = Path(tmpdir) / SCRIPT_NAME
        script_path.write_text(script.text(), encoding="utf-8")
        cmd = build_command(script_path, executable=executable, raise_window=raise_window)
        logger.debug("Running: %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, check=False)
        except FileNotFoundError as exc:
            raise EngineError(f"Cannot run {executable!r}: {exc.strerror or exc}") from exc

    if result.returncode != 0:
        logger.error("%s exited with status %d", executable, result.returncode)
        sys.stderr.write(script.text())
        sys.stderr.flush()
    return result.returncode
