"""Build provenance: git-derived version metadata for stamping build artifacts."""

from build_provenance.cache import (
    ProcessWideCache,
    configure_repo_status,
    get_repo_status,
)
from build_provenance.config import ProvenanceConfig
from build_provenance.errors import (
    CommandExecutionError,
    DoubleInitializationError,
    ProvenanceError,
)
from build_provenance.locator import locate_git
from build_provenance.resolver import RepoStatusResolver
from build_provenance.runner import run_command
from build_provenance.status import RepoStatus, WorkingTreeStatus

__version__ = "0.1.0"

__all__ = [
    # Result
    "RepoStatus",
    "WorkingTreeStatus",
    # Resolution
    "RepoStatusResolver",
    "locate_git",
    "run_command",
    # Process-wide access
    "ProcessWideCache",
    "configure_repo_status",
    "get_repo_status",
    # Configuration
    "ProvenanceConfig",
    # Errors
    "ProvenanceError",
    "CommandExecutionError",
    "DoubleInitializationError",
]
