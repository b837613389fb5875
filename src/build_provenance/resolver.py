"""Resolve the repository status by querying git.

Pipeline:
    1. Locate git (absent -> defaults).
    2. Check for the metadata directory (absent -> defaults).
    3-5. Run the log, status and branch queries in order. The first failing
         query aborts the rest; fields set by earlier queries are kept.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path

from build_provenance.config import ProvenanceConfig
from build_provenance.errors import CommandExecutionError
from build_provenance.locator import locate_git
from build_provenance.runner import run_command
from build_provenance.status import RepoStatus, WorkingTreeStatus, parse_log_output

logger = logging.getLogger(__name__)

Runner = Callable[..., str]
Locator = Callable[..., str | None]

LOG_ARGS = ("log", "-1", "--format=format:%h %H %cd", "--date=iso", "--abbrev=9")
STATUS_ARGS = ("status", "--porcelain")
BRANCH_ARGS = ("rev-parse", "--abbrev-ref", "HEAD")


def _apply_log(status: RepoStatus, output: str) -> RepoStatus:
    parsed = parse_log_output(output)
    if parsed is None:
        return status
    logger.info("Latest commit: %s", output)
    short_hash, long_hash, commit_date = parsed
    return replace(
        status,
        short_commit_hash=short_hash,
        long_commit_hash=long_hash,
        commit_date=commit_date,
    )


def _apply_status(status: RepoStatus, output: str) -> RepoStatus:
    if output:
        logger.info("Repository is dirty:%s%s", os.linesep, output)
        return replace(status, status=WorkingTreeStatus.DIRTY)
    return replace(status, status=WorkingTreeStatus.CLEAN)


def _apply_branch(status: RepoStatus, output: str) -> RepoStatus:
    if output:
        return replace(status, branch=output)
    return status


@dataclass(frozen=True)
class QueryStep:
    """One fixed git query and how its output updates the status."""

    name: str
    args: tuple[str, ...]
    apply: Callable[[RepoStatus, str], RepoStatus]

    def argv(self, git_path: str) -> list[str]:
        return [git_path, *self.args]


QUERY_STEPS: tuple[QueryStep, ...] = (
    QueryStep("log", LOG_ARGS, _apply_log),
    QueryStep("status", STATUS_ARGS, _apply_status),
    QueryStep("branch", BRANCH_ARGS, _apply_branch),
)


class RepoStatusResolver:
    """Builds a RepoStatus from the fixed set of git queries.

    Never raises: a missing executable, a missing repository or a failing
    query all degrade to default field values.
    """

    def __init__(
        self,
        config: ProvenanceConfig | None = None,
        *,
        runner: Runner = run_command,
        locator: Locator = locate_git,
    ) -> None:
        self._config = config or ProvenanceConfig()
        self._runner = runner
        self._locator = locator

    @property
    def config(self) -> ProvenanceConfig:
        return self._config

    def resolve(self, project_root: Path, version: str) -> RepoStatus:
        """Resolve the repository status for ``project_root``.

        Args:
            project_root: Root of the checkout.
            version: Project version, copied into the result unchanged.

        Returns:
            Best-effort RepoStatus; unavailable fields keep their defaults.
        """
        result = RepoStatus.defaults(version)

        git_path = self._locator(self._config.git_path)
        if git_path is None:
            return result

        if not (project_root / self._config.metadata_dir).is_dir():
            logger.debug(
                "%s is not a git repository (no %s directory)",
                project_root,
                self._config.metadata_dir,
            )
            return result

        return self._run_queries(git_path, project_root, result)

    def _run_queries(self, git_path: str, project_root: Path, result: RepoStatus) -> RepoStatus:
        """Run each query step in order, stopping at the first failure."""
        for step in QUERY_STEPS:
            try:
                output = self._runner(
                    step.argv(git_path),
                    cwd=project_root,
                    timeout=self._config.command_timeout,
                )
                result = step.apply(result, output)
            except (CommandExecutionError, OSError, ValueError) as e:
                logger.warning("Failed to retrieve the repository status: %s", e, exc_info=True)
                return replace(result, failed_query=step.name)
        return result
