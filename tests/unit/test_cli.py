"""Tests for the provenance CLI."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from build_provenance.cli.main import OutputFormat, app, render_status
from build_provenance.resolver import RepoStatusResolver
from build_provenance.status import RepoStatus, WorkingTreeStatus
from conftest import LONG_HASH

runner = CliRunner()


def _sample_status(**overrides) -> RepoStatus:
    fields = {
        "version": "1.4.0",
        "long_commit_hash": LONG_HASH,
        "short_commit_hash": "ab12cd34e",
        "commit_date": "2024-01-01 12:00:00 +0000",
        "status": WorkingTreeStatus.CLEAN,
        "branch": "main",
    }
    fields.update(overrides)
    return RepoStatus(**fields)


def _patched_resolver(status: RepoStatus):
    resolver = MagicMock(spec=RepoStatusResolver)
    resolver.resolve.return_value = status
    return patch("build_provenance.cache.RepoStatusResolver", return_value=resolver)


class TestRenderStatus:
    def test_properties(self) -> None:
        text = render_status(_sample_status(), OutputFormat.PROPERTIES)
        assert text.splitlines()[0] == "version=1.4.0"
        assert "repoStatus=clean" in text

    def test_json(self) -> None:
        data = json.loads(render_status(_sample_status(), OutputFormat.JSON))
        assert data["longCommitHash"] == LONG_HASH

    def test_text_aligns_keys(self) -> None:
        lines = render_status(_sample_status(), OutputFormat.TEXT).splitlines()
        assert lines[0].startswith("version         ")
        assert lines[-1].endswith("main")


class TestShowCommand:
    def test_show_json(self, tmp_path: Path) -> None:
        with _patched_resolver(_sample_status()):
            result = runner.invoke(
                app, ["show", str(tmp_path), "--version", "1.4.0", "--format", "json"]
            )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["branch"] == "main"

    def test_show_outside_repository(self, tmp_path: Path) -> None:
        """A non-checkout directory still prints the default status."""
        result = runner.invoke(
            app, ["show", str(tmp_path), "-V", "0.1", "--format", "properties"]
        )
        assert result.exit_code == 0, result.output
        assert "shortCommitHash=0000000" in result.output
        assert "repoStatus=unknown" in result.output

    def test_show_partial_result_warns(self, tmp_path: Path) -> None:
        with _patched_resolver(_sample_status(failed_query="status")):
            result = runner.invoke(app, ["show", str(tmp_path)])
        assert result.exit_code == 0
        assert "'status' query failed" in result.output

    def test_show_strict_fails_on_partial_result(self, tmp_path: Path) -> None:
        with _patched_resolver(_sample_status(failed_query="branch")):
            result = runner.invoke(app, ["show", str(tmp_path), "--strict"])
        assert result.exit_code == 1

    def test_show_passes_git_path_override(self, tmp_path: Path) -> None:
        with _patched_resolver(_sample_status()) as resolver_cls:
            runner.invoke(app, ["show", str(tmp_path), "--git-path", "/opt/git"])
        config = resolver_cls.call_args.args[0]
        assert config.git_path == "/opt/git"


class TestLocateCommand:
    def test_locate_override(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["locate", str(tmp_path), "--git-path", "/opt/git"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "/opt/git"

    def test_locate_not_found(self, tmp_path: Path) -> None:
        with patch("build_provenance.cli.main.locate_git", return_value=None):
            result = runner.invoke(app, ["locate", str(tmp_path)])
        assert result.exit_code == 1
        assert "git not found" in result.output
