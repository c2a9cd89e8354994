"""Shared test fixtures."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from docnorm.adapters.storage import InMemoryDocumentRepository, InMemoryTemplateRepository
from docnorm.domain.reconciler import TemplateReconciler
from docnorm.domain.rules import ValidationOptions
from docnorm.domain.services import DocumentPipeline
from docnorm.ports.llm import CompletionPort
from docnorm.ports.reader import DocumentReaderPort
from docnorm.ports.writer import DocumentWriterPort

INVOICE_TEMPLATE = "Amount: {{amount}}\nParty: {{party}}"
INVOICE_TEXT = "Dear Sir, payment due $500"
INVOICE_FILLED = "Amount: $500\nParty: Sir"


@pytest.fixture
def sample_document(tmp_path: Path) -> Path:
    """Small text document on disk."""
    path = tmp_path / "letter.txt"
    path.write_text(INVOICE_TEXT)
    return path


@pytest.fixture
def template_file(tmp_path: Path) -> Path:
    path = tmp_path / "invoice-template.md"
    path.write_text(INVOICE_TEMPLATE)
    return path


@pytest.fixture
def mock_reader() -> MagicMock:
    """Mock reader port that supports everything and returns fixed text."""
    mock = MagicMock(spec=DocumentReaderPort)
    mock.is_supported.return_value = True
    mock.read.return_value = INVOICE_TEXT
    return mock


@pytest.fixture
def mock_writer() -> MagicMock:
    return MagicMock(spec=DocumentWriterPort)


@pytest.fixture
def mock_completion() -> MagicMock:
    """Mock completion port filling the invoice template."""
    mock = MagicMock(spec=CompletionPort)
    mock.complete.return_value = INVOICE_FILLED
    return mock


@pytest.fixture
def documents() -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository()


@pytest.fixture
def templates() -> InMemoryTemplateRepository:
    return InMemoryTemplateRepository()


@pytest.fixture
def pipeline(
    mock_reader: MagicMock,
    mock_writer: MagicMock,
    mock_completion: MagicMock,
    documents: InMemoryDocumentRepository,
    templates: InMemoryTemplateRepository,
) -> DocumentPipeline:
    return DocumentPipeline(
        reader=mock_reader,
        writer=mock_writer,
        reconciler=TemplateReconciler(mock_completion),
        documents=documents,
        templates=templates,
        options=ValidationOptions(allowed_extensions=[".txt", ".pdf", ".md"]),
    )
