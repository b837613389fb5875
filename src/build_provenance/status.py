"""Repository status record stamped into build artifacts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

DEFAULT_LONG_COMMIT_HASH = "0" * 40
# Seven zeros matches the historical default, even though real hashes are abbreviated to nine.
DEFAULT_SHORT_COMMIT_HASH = "0" * 7
DEFAULT_COMMIT_DATE = "1970-01-01 00:00:00 +0000"
DEFAULT_BRANCH = "unknown"


class WorkingTreeStatus(StrEnum):
    """Cleanliness of the working tree relative to HEAD."""

    CLEAN = "clean"
    DIRTY = "dirty"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RepoStatus:
    """Immutable snapshot of version-control provenance at build time.

    Every provenance field always holds a value; defaults stand in for
    anything that could not be queried.

    Attributes:
        version: Project version, supplied by the caller.
        long_commit_hash: Full 40-character commit hash.
        short_commit_hash: Abbreviated commit hash.
        commit_date: Commit timestamp as ``YYYY-MM-DD HH:MM:SS +ZZZZ``.
        status: Working tree cleanliness.
        branch: Short name of the current branch.
        failed_query: Name of the query that aborted resolution, if any.
    """

    version: str
    long_commit_hash: str = DEFAULT_LONG_COMMIT_HASH
    short_commit_hash: str = DEFAULT_SHORT_COMMIT_HASH
    commit_date: str = DEFAULT_COMMIT_DATE
    status: WorkingTreeStatus = WorkingTreeStatus.UNKNOWN
    branch: str = DEFAULT_BRANCH
    failed_query: str | None = None

    @classmethod
    def defaults(cls, version: str) -> RepoStatus:
        """Return a status with only the version set."""
        return cls(version=version)

    @property
    def is_complete(self) -> bool:
        """True when no query failed during resolution."""
        return self.failed_query is None

    def to_dict(self) -> dict[str, str]:
        """Provenance fields keyed by their build-property names."""
        return {
            "version": self.version,
            "longCommitHash": self.long_commit_hash,
            "shortCommitHash": self.short_commit_hash,
            "commitDate": self.commit_date,
            "repoStatus": str(self.status),
            "branch": self.branch,
        }


def parse_log_output(text: str) -> tuple[str, str, str] | None:
    """Split ``git log --format=format:'%h %H %cd' --date=iso`` output.

    The ISO date is three whitespace-separated tokens (date, time, offset)
    that are joined back together.

    Returns:
        ``(short_hash, long_hash, commit_date)``, or None for empty output.

    Raises:
        ValueError: The output has fewer than five tokens.
    """
    tokens = text.split()
    if not tokens:
        return None
    if len(tokens) < 5:
        raise ValueError(f"Unexpected git log output: {text!r}")
    return tokens[0], tokens[1], " ".join(tokens[2:5])
