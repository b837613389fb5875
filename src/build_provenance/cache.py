"""Once-per-process access to the resolved repository status.

Usage:
    configure_repo_status(Path("."), version="1.2.0")
    status = get_repo_status()

The guard is a plain flag. Concurrent first-time calls are not supported;
build configuration is expected to run on a single thread.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from build_provenance.config import ProvenanceConfig
from build_provenance.errors import DoubleInitializationError, ProvenanceError
from build_provenance.resolver import RepoStatusResolver
from build_provenance.status import RepoStatus

logger = logging.getLogger(__name__)


class ProcessWideCache:
    """Computes a RepoStatus at most once and hands out the same object."""

    def __init__(self, compute: Callable[[], RepoStatus]) -> None:
        self._compute = compute
        self._initialized = False
        self._value: RepoStatus | None = None

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> RepoStatus:
        """Compute and store the status.

        Raises:
            DoubleInitializationError: The status was already computed.
        """
        if self._initialized:
            raise DoubleInitializationError("Repository status has already been resolved")
        value = self._compute()
        self._value = value
        self._initialized = True
        logger.debug("Repository status resolved: %s", value)
        return value

    def get(self) -> RepoStatus:
        """Return the stored status, computing it on first access."""
        if self._value is None:
            return self.initialize()
        return self._value


_process_cache: ProcessWideCache | None = None


def configure_repo_status(
    project_root: Path,
    version: str,
    config: ProvenanceConfig | None = None,
    *,
    resolver: RepoStatusResolver | None = None,
) -> ProcessWideCache:
    """Install the process-wide cache. Resolution itself stays lazy.

    Raises:
        DoubleInitializationError: A cache was already installed in this process.
    """
    global _process_cache
    if _process_cache is not None:
        raise DoubleInitializationError("Repository status is already configured for this process")

    resolver = resolver or RepoStatusResolver(config)
    _process_cache = ProcessWideCache(lambda: resolver.resolve(project_root, version))
    return _process_cache


def get_repo_status() -> RepoStatus:
    """Read the process-wide repository status.

    Raises:
        ProvenanceError: configure_repo_status() was never called.
    """
    if _process_cache is None:
        raise ProvenanceError("Repository status is not configured; call configure_repo_status()")
    return _process_cache.get()


def _reset_process_cache() -> None:
    global _process_cache
    _process_cache = None
