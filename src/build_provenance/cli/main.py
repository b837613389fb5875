"""Build provenance CLI main entry point."""

from __future__ import annotations

import json
import logging
from enum import StrEnum
from pathlib import Path
from typing import Annotated

import typer

from build_provenance.cache import configure_repo_status, get_repo_status
from build_provenance.config import ProvenanceConfig
from build_provenance.locator import locate_git
from build_provenance.status import RepoStatus

app = typer.Typer(
    name="provenance",
    help="Build provenance - git version metadata for stamping build artifacts",
    no_args_is_help=True,
)


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"
    PROPERTIES = "properties"


def configure_logging(verbose: bool) -> None:
    """Send library log records to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def render_status(status: RepoStatus, output_format: OutputFormat) -> str:
    """Render a status in the requested format."""
    data = status.to_dict()
    if output_format == OutputFormat.JSON:
        return json.dumps(data, indent=2)
    if output_format == OutputFormat.PROPERTIES:
        return "\n".join(f"{key}={value}" for key, value in data.items())
    width = max(len(key) for key in data)
    return "\n".join(f"{key:<{width}}  {value}" for key, value in data.items())


@app.command()
def show(
    project_root: Annotated[
        Path,
        typer.Argument(help="Root of the checkout", file_okay=False),
    ] = Path("."),
    version: Annotated[
        str,
        typer.Option("--version", "-V", help="Project version to stamp"),
    ] = "unspecified",
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.TEXT,
    git_path: Annotated[
        str | None,
        typer.Option("--git-path", help="Path to git (skips the lookup)"),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit 1 if any git query failed"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log git invocations"),
    ] = False,
) -> None:
    """Resolve and print the repository status.

    Examples:
        provenance show
        provenance show ../my-project --version 1.2.0 --format json
        provenance show --format properties > version.properties
    """
    configure_logging(verbose)
    config = ProvenanceConfig.load(project_root).with_overrides(git_path=git_path)

    configure_repo_status(project_root, version, config)
    status = get_repo_status()

    typer.echo(render_status(status, output_format))

    if not status.is_complete:
        typer.secho(
            f"Warning: the '{status.failed_query}' query failed; remaining fields are defaults",
            fg=typer.colors.YELLOW,
            err=True,
        )
        if strict:
            raise typer.Exit(1)


@app.command()
def locate(
    project_root: Annotated[
        Path,
        typer.Argument(help="Project whose pyproject.toml may set git-path", file_okay=False),
    ] = Path("."),
    git_path: Annotated[
        str | None,
        typer.Option("--git-path", help="Path to git (returned unchanged)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log lookup details"),
    ] = False,
) -> None:
    """Print the path of the git executable that would be used."""
    configure_logging(verbose)
    config = ProvenanceConfig.load(project_root).with_overrides(git_path=git_path)

    path = locate_git(config.git_path)
    if path is None:
        typer.secho("git not found", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    typer.echo(path)


def main() -> None:
    """Console script entry point."""
    app()
