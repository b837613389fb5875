"""Command-line interface for build provenance."""

from build_provenance.cli.main import app, main

__all__ = ["app", "main"]
