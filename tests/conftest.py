"""Shared fixtures for build-provenance tests."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any

import pytest

from build_provenance.cache import _reset_process_cache

LONG_HASH = "ab12cd34e5f60718293a4b5c6d7e8f9012345678"
SHORT_HASH = "ab12cd34e"
COMMIT_DATE = "2024-01-01 12:00:00 +0000"
LOG_OUTPUT = f"{SHORT_HASH} {LONG_HASH} {COMMIT_DATE}"


@pytest.fixture(autouse=True)
def _fresh_process_cache() -> Iterator[None]:
    """Each test starts without a process-wide cache installed."""
    _reset_process_cache()
    yield
    _reset_process_cache()


class FakeGit:
    """Stands in for run_command, answering by git subcommand.

    Responses are keyed by the first argument after the executable
    (``log``, ``status``, ``rev-parse``). A response that is an exception
    is raised instead of returned.
    """

    def __init__(self, responses: dict[str, str | Exception] | None = None) -> None:
        self.responses: dict[str, str | Exception] = {
            "log": LOG_OUTPUT,
            "status": "",
            "rev-parse": "main",
        }
        self.responses.update(responses or {})
        self.calls: list[list[str]] = []
        self.kwargs: list[dict[str, Any]] = []

    def __call__(self, argv: Sequence[str], **kwargs: Any) -> str:
        self.calls.append(list(argv))
        self.kwargs.append(kwargs)
        response = self.responses[argv[1]]
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def subcommands(self) -> list[str]:
        return [call[1] for call in self.calls]


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """A directory that looks like a git checkout."""
    (tmp_path / ".git").mkdir()
    return tmp_path
