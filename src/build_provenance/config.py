"""Configuration for repository-status resolution."""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

PYPROJECT_TABLE = "build-provenance"
ENV_GIT_PATH = "BUILD_PROVENANCE_GIT_PATH"
ENV_COMMAND_TIMEOUT = "BUILD_PROVENANCE_COMMAND_TIMEOUT"


@dataclass(frozen=True)
class ProvenanceConfig:
    """Settings that shape how provenance is resolved.

    Attributes:
        git_path: Explicit path to git. Used verbatim, skipping the lookup.
        metadata_dir: Repository metadata directory expected under the project root.
        command_timeout: Seconds before a git query is killed. None waits forever.
    """

    git_path: str | None = None
    metadata_dir: str = ".git"
    command_timeout: float | None = None

    def __post_init__(self) -> None:
        if not self.metadata_dir:
            raise ValueError("metadata_dir must not be empty")
        if self.command_timeout is not None and self.command_timeout <= 0:
            raise ValueError(f"command_timeout must be > 0, got {self.command_timeout}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "git_path": self.git_path,
            "metadata_dir": self.metadata_dir,
            "command_timeout": self.command_timeout,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProvenanceConfig:
        """Build a config, replacing each invalid value with its default."""
        normalized = {str(key).replace("-", "_"): value for key, value in data.items()}

        git_path = normalized.get("git_path")
        metadata_dir = normalized.get("metadata_dir")
        if not isinstance(metadata_dir, str) or not metadata_dir:
            metadata_dir = ".git"

        return cls(
            git_path=str(git_path) if git_path else None,
            metadata_dir=metadata_dir,
            command_timeout=_parse_timeout(normalized.get("command_timeout")),
        )

    def with_overrides(self, **overrides: Any) -> ProvenanceConfig:
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        return replace(self, **changes)

    @classmethod
    def load(
        cls,
        project_root: Path,
        environ: Mapping[str, str] | None = None,
    ) -> ProvenanceConfig:
        """Load ``[tool.build-provenance]`` from pyproject.toml, then apply env overrides.

        A missing file or table yields defaults. Malformed TOML and invalid
        environment values are logged and ignored one by one.
        """
        environ = os.environ if environ is None else environ
        config = cls.from_dict(_read_tool_table(project_root / "pyproject.toml"))

        timeout: float | None = None
        raw_timeout = environ.get(ENV_COMMAND_TIMEOUT)
        if raw_timeout:
            timeout = _parse_timeout(raw_timeout)
            if timeout is None:
                logger.warning("Ignoring invalid %s=%r", ENV_COMMAND_TIMEOUT, raw_timeout)

        return config.with_overrides(
            git_path=environ.get(ENV_GIT_PATH) or None,
            command_timeout=timeout,
        )


def _parse_timeout(value: Any) -> float | None:
    """Positive number of seconds, or None for anything else."""
    if value is None or isinstance(value, bool):
        return None
    try:
        timeout = float(value)
    except (ValueError, TypeError):
        return None
    return timeout if timeout > 0 else None


def _read_tool_table(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Could not read %s: %s", path, e)
        return {}

    tool = data.get("tool")
    if not isinstance(tool, dict):
        return {}
    table = tool.get(PYPROJECT_TABLE, {})
    return table if isinstance(table, dict) else {}
