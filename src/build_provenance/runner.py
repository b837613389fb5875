"""Blocking execution of external commands."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from build_provenance.errors import CommandExecutionError

logger = logging.getLogger(__name__)

TIMEOUT_EXIT_CODE = -1


def run_command(
    argv: Sequence[str],
    *,
    cwd: Path | None = None,
    timeout: float | None = None,
) -> str:
    """Run a command and return its trimmed stdout.

    Args:
        argv: Executable followed by its arguments. Never passed to a shell.
        cwd: Working directory for the child process.
        timeout: Seconds to wait before killing the child. ``None`` waits forever.

    Returns:
        Captured stdout with surrounding whitespace removed.

    Raises:
        CommandExecutionError: The process exited non-zero or timed out.
        OSError: The executable could not be started.
    """
    args = [str(arg) for arg in argv]
    logger.debug("Running %s (cwd=%s)", args, cwd)

    try:
        completed = subprocess.run(
            args,
            capture_output=True,
            text=True,
            cwd=cwd,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise CommandExecutionError(args, TIMEOUT_EXIT_CODE, f"timed out after {e.timeout}s") from e

    stdout = (completed.stdout or "").strip()
    if completed.returncode != 0:
        message = (completed.stderr or "").strip() or stdout
        raise CommandExecutionError(args, completed.returncode, message)

    return stdout
