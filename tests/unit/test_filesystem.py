"""Unit tests for filesystem storage adapter."""

import asyncio
from pathlib import Path

import pytest
import yaml

from docnorm.adapters.storage.filesystem import (
    YamlDocumentRepository,
    default_output_path,
    sanitize_filename,
)
from docnorm.domain.models import Document, DocumentStatus


class TestSanitizeFilename:
    """Tests for sanitize_filename function."""

    def test_normal_filename_unchanged(self) -> None:
        assert sanitize_filename("Quarterly report 2024") == "Quarterly report 2024"

    def test_removes_null_bytes(self) -> None:
        assert sanitize_filename("report\x00draft") == "reportdraft"

    def test_replaces_path_traversal(self) -> None:
        assert sanitize_filename("../../secrets/keys") == "secrets keys"

    def test_replaces_problematic_chars(self) -> None:
        assert sanitize_filename('draft<>:"/\\|?*final') == "draft final"

    def test_strips_leading_trailing_dots_spaces(self) -> None:
        assert sanitize_filename("  .notes.  ") == "notes"

    def test_returns_untitled_for_empty(self) -> None:
        assert sanitize_filename("") == "Untitled"
        assert sanitize_filename("...") == "Untitled"

    def test_truncates_at_word_boundary(self) -> None:
        result = sanitize_filename("Section " * 40)
        assert len(result) <= 180
        assert not result.endswith(" ")

    def test_unicode_preserved(self) -> None:
        assert sanitize_filename("Vertrag für März") == "Vertrag für März"


class TestDefaultOutputPath:
    """Tests for default_output_path."""

    def test_builds_normalized_name(self, tmp_path: Path) -> None:
        dest = default_output_path(tmp_path, Path("/in/letter.txt"), ".pdf")
        assert dest == tmp_path / "letter - normalized.pdf"

    def test_accepts_extension_without_dot(self, tmp_path: Path) -> None:
        dest = default_output_path(tmp_path, Path("letter.txt"), "md")
        assert dest.name == "letter - normalized.md"

    def test_avoids_existing_files(self, tmp_path: Path) -> None:
        (tmp_path / "letter - normalized.pdf").touch()
        (tmp_path / "letter - normalized (1).pdf").touch()
        dest = default_output_path(tmp_path, Path("letter.txt"), ".pdf")
        assert dest.name == "letter - normalized (2).pdf"

    def test_sanitizes_stem(self, tmp_path: Path) -> None:
        dest = default_output_path(tmp_path, Path("a:b?.txt"), ".txt")
        assert dest.name == "a b - normalized.txt"


class TestYamlDocumentRepository:
    """Tests for the YAML-backed document history."""

    @pytest.fixture
    def repository(self, tmp_path: Path) -> YamlDocumentRepository:
        return YamlDocumentRepository(tmp_path / "state" / "history.yaml")

    def test_empty_when_missing(self, repository: YamlDocumentRepository) -> None:
        assert asyncio.run(repository.list_all()) == []

    def test_round_trip(self, repository: YamlDocumentRepository) -> None:
        doc = Document.create("letter.txt", "Dear Sir, payment due $500")
        doc.set_normalized_content("Amount: $500\nParty: Sir")
        asyncio.run(repository.add(doc))

        loaded = asyncio.run(repository.get_by_id(doc.id))
        assert loaded == doc
        assert loaded.status == DocumentStatus.NORMALIZED
        assert not repository.path.with_suffix(".yaml.tmp").exists()

    def test_survives_new_instance(self, repository: YamlDocumentRepository) -> None:
        doc = Document.create("letter.txt", "text")
        asyncio.run(repository.add(doc))

        reopened = YamlDocumentRepository(repository.path)
        assert [d.id for d in asyncio.run(reopened.list_all())] == [doc.id]

    def test_update_existing_only(self, repository: YamlDocumentRepository) -> None:
        doc = Document.create("letter.txt", "text")
        asyncio.run(repository.add(doc))
        doc.mark_failed()
        asyncio.run(repository.update(doc))
        asyncio.run(repository.update(Document.create("other.txt", "x")))

        stored = asyncio.run(repository.list_all())
        assert len(stored) == 1
        assert stored[0].status == DocumentStatus.FAILED

    def test_skips_malformed_entries(self, repository: YamlDocumentRepository) -> None:
        doc = Document.create("letter.txt", "text")
        asyncio.run(repository.add(doc))

        entries = yaml.safe_load(repository.path.read_text())
        entries.append({"file_name": "no-id.txt"})
        entries.append({"id": "not-a-uuid", "file_name": "x", "created_at": "2024-01-01"})
        repository.path.write_text(yaml.safe_dump(entries))

        assert [d.id for d in asyncio.run(repository.list_all())] == [doc.id]
