"""Unit tests for CLI helper functions."""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import AsyncMock, patch

import click
import pytest
from click.testing import CliRunner

from docnorm.__main__ import (
    cli,
    load_manifest,
    resolve_output_path,
    sort_newest_first,
)
from docnorm.domain.models import Document, DocumentView, ValidationResult


class TestLoadManifest:
    """Tests for load_manifest."""

    def test_resolves_relative_paths(self, tmp_path: Path) -> None:
        manifest = tmp_path / "batch.yaml"
        manifest.write_text(
            "- original: in/a.txt\n"
            "  template: /abs/invoice.md\n"
            "  generated: out/a.pdf\n"
            "  expected: expected/a.txt\n"
        )
        [request] = load_manifest(manifest)

        assert request.original_path == tmp_path / "in" / "a.txt"
        assert request.template_path == Path("/abs/invoice.md")
        assert request.generated_path == tmp_path / "out" / "a.pdf"
        assert request.expected_path == tmp_path / "expected" / "a.txt"

    def test_expected_is_optional(self, tmp_path: Path) -> None:
        manifest = tmp_path / "batch.yaml"
        manifest.write_text("- {original: a.txt, template: t.md, generated: g.txt}\n")
        assert load_manifest(manifest)[0].expected_path is None

    def test_empty_manifest(self, tmp_path: Path) -> None:
        manifest = tmp_path / "batch.yaml"
        manifest.write_text("")
        assert load_manifest(manifest) == []

    def test_rejects_mapping_root(self, tmp_path: Path) -> None:
        manifest = tmp_path / "batch.yaml"
        manifest.write_text("original: a.txt\n")
        with pytest.raises(click.BadParameter, match="list"):
            load_manifest(manifest)

    def test_rejects_missing_keys(self, tmp_path: Path) -> None:
        manifest = tmp_path / "batch.yaml"
        manifest.write_text("- {original: a.txt}\n")
        with pytest.raises(click.BadParameter, match="template, generated"):
            load_manifest(manifest)

    def test_rejects_scalar_entry(self, tmp_path: Path) -> None:
        manifest = tmp_path / "batch.yaml"
        manifest.write_text("- just-a-string\n")
        with pytest.raises(click.BadParameter, match="entry 0"):
            load_manifest(manifest)


class TestResolveOutputPath:
    """Tests for resolve_output_path."""

    def test_explicit_output_wins(self, tmp_path: Path) -> None:
        explicit = tmp_path / "x.html"
        assert resolve_output_path(Path("a.txt"), explicit, "pdf", tmp_path) == explicit

    def test_format_uses_output_dir(self, tmp_path: Path) -> None:
        result = resolve_output_path(Path("in/a.txt"), None, "docx", tmp_path)
        assert result == tmp_path / "a - normalized.docx"

    def test_no_output(self, tmp_path: Path) -> None:
        assert resolve_output_path(Path("a.txt"), None, None, tmp_path) is None


class TestSortNewestFirst:
    def test_order(self) -> None:
        now = datetime.now(timezone.utc)
        views = []
        for offset in (2, 0, 1):
            doc = Document.create(f"{offset}.txt", "x")
            doc.created_at = now - timedelta(hours=offset)
            views.append(DocumentView.from_document(doc))

        assert [v.file_name for v in sort_newest_first(views)] == ["0.txt", "1.txt", "2.txt"]


class TestCommands:
    """Smoke tests for CLI commands that need no completion service."""

    @pytest.fixture
    def config_file(self, tmp_path: Path) -> Path:
        path = tmp_path / "config.toml"
        path.write_text(
            "[paths]\n"
            f'output_dir = "{tmp_path / "out"}"\n'
            f'history_file = "{tmp_path / "history.yaml"}"\n'
        )
        return path

    def test_templates_lists_builtins(self, config_file: Path) -> None:
        result = CliRunner().invoke(cli, ["-c", str(config_file), "templates"])
        assert result.exit_code == 0
        assert "legal-contract" in result.output
        assert "placeholders:" in result.output

    def test_history_empty(self, config_file: Path) -> None:
        result = CliRunner().invoke(cli, ["-c", str(config_file), "history"])
        assert result.exit_code == 0
        assert "No documents processed yet" in result.output

    def test_show_rejects_bad_id(self, config_file: Path) -> None:
        result = CliRunner().invoke(cli, ["-c", str(config_file), "show", "not-a-uuid"])
        assert result.exit_code != 0
        assert "Not a document ID" in result.output

    def test_validate_exits_nonzero_when_invalid(
        self, config_file: Path, tmp_path: Path
    ) -> None:
        for name in ("a.txt", "t.md", "g.txt"):
            (tmp_path / name).write_text("x")

        with patch("docnorm.__main__.build_validator") as build:
            build.return_value.validate = AsyncMock(
                return_value=ValidationResult(
                    is_valid=False, confidence_score=0.2, summary="Missing amount"
                )
            )
            result = CliRunner().invoke(
                cli,
                [
                    "-c", str(config_file), "validate",
                    str(tmp_path / "a.txt"), str(tmp_path / "t.md"), str(tmp_path / "g.txt"),
                ],
            )

        assert result.exit_code == 1
        assert "confidence=0.20" in result.output
        assert "Missing amount" in result.output
