"""Locate the git executable."""

from __future__ import annotations

import logging
import platform
import re
from collections.abc import Callable, Sequence

from build_provenance.errors import CommandExecutionError
from build_provenance.runner import run_command

logger = logging.getLogger(__name__)

WINDOWS_LOOKUP = ("where.exe", "git.exe")
POSIX_LOOKUP = ("which", "git")

_LINE_SPLIT = re.compile(r"\r\n|\n")


def locate_git(
    override: str | None = None,
    *,
    system: str | None = None,
    runner: Callable[[Sequence[str]], str] = run_command,
) -> str | None:
    """Find the path to ``git``.

    An override is returned as-is without checking that it exists. Otherwise
    the platform lookup command is run; ``where.exe`` prints every match on
    its own line, so only the first one is used.

    Returns:
        Path to git, or None when it is not available.
    """
    if override:
        return override

    system = system or platform.system()
    try:
        if system == "Windows":
            output = runner(WINDOWS_LOOKUP)
            path = _LINE_SPLIT.split(output)[0]
        else:
            path = runner(POSIX_LOOKUP)
    except (CommandExecutionError, OSError, ValueError) as e:
        logger.warning("Git not available: %s", e, exc_info=True)
        return None

    if not path:
        logger.warning("Git not available: lookup returned no path")
        return None
    return path
