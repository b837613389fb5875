"""Exceptions raised while resolving build provenance."""

from __future__ import annotations

from collections.abc import Sequence


class ProvenanceError(Exception):
    """Base class for all build-provenance errors."""


class CommandExecutionError(ProvenanceError):
    """An external command exited with a non-zero exit code.

    Attributes:
        argv: The command that was invoked.
        exit_code: Process exit code (-1 when the command timed out).
        message: Trimmed stderr, or trimmed stdout when stderr was empty.

    ``str(error)`` is the diagnostic text: the invoked command and exit code
    followed by ``message``. ``message`` itself stays unprefixed so callers
    can match on what the command printed.
    """

    def __init__(self, argv: Sequence[str], exit_code: int, message: str) -> None:
        self.argv = tuple(argv)
        self.exit_code = exit_code
        self.message = message
        super().__init__(
            f"'{' '.join(self.argv)}' exited with a non-zero exit code: {exit_code}:\n{message}"
        )


class DoubleInitializationError(ProvenanceError):
    """Repository status was resolved a second time in the same process.

    Signals the resolver being wired into more than one place. Never caught
    inside this package.
    """
