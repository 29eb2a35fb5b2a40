# Copyright (c) 2025 Daniele De Sensi e Saverio Pasqualoni
# Licensed under the MIT License

from __future__ import annotations

import glob
import logging
import os

logger = logging.getLogger(__name__)


def expand_files(pattern: str) -> list[str]:
    """
    Expand ``pattern`` the way the shell would (``~``, ``*``, ``?``, ``[...]``
    and recursive ``**``) and return the matches in sorted order.

    A pattern that matches nothing is returned unchanged as the only entry so
    that gnuplot reports the missing file itself.
    """
    expanded = os.path.expanduser(pattern)
    matches = sorted(glob.glob(expanded, recursive=True))
    if not matches:
        logger.debug("Pattern %r matched nothing, passing it through", pattern)
        return [pattern]
    logger.debug("Pattern %r matched %d file(s)", pattern, len(matches))
    return matches
