# Copyright (c) 2025 Daniele De Sensi e Saverio Pasqualoni
# Licensed under the MIT License

"""
Command line front end for gnuplot.

Flags and file patterns are turned into a gnuplot script (see
:mod:`gplot.script`) which is then run by the ``gnuplot`` executable
(:mod:`gplot.engine`). Invoke ``gplot`` or ``python -m gplot`` to use it.
"""

from .cli import main

__all__ = ["main"]
