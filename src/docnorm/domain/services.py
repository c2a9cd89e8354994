"""Domain services - orchestrate business logic."""

import asyncio
import logging
import uuid
from enum import Enum
from pathlib import Path

from ..ports.reader import DocumentReaderPort
from ..ports.repository import DocumentRepositoryPort, TemplateRepositoryPort
from ..ports.writer import DocumentWriterPort
from .errors import (
    DocumentError,
    DocumentNotFoundError,
    NormalizationError,
    ProcessingError,
    TemplateNotFoundError,
    UnsupportedFormatError,
    ValidationFailedError,
)
from .models import Document, DocumentView, NormalizeRequest, OutputKind
from .reconciler import TemplateReconciler
from .rules import ValidationOptions, validate_document

logger = logging.getLogger(__name__)

OUTPUT_KINDS = {
    ".pdf": OutputKind.PDF,
    ".doc": OutputKind.WORD,
    ".docx": OutputKind.WORD,
    ".rtf": OutputKind.WORD,
    ".odt": OutputKind.WORD,
    ".html": OutputKind.HTML,
    ".htm": OutputKind.HTML,
    ".txt": OutputKind.TEXT,
    ".md": OutputKind.MARKDOWN,
}


class Stage(str, Enum):
    RECEIVED = "Received"
    VALIDATED = "Validated"
    READ = "Read"
    TEMPLATE_RESOLVED = "TemplateResolved"
    RECONCILED = "Reconciled"
    PERSISTED = "Persisted"


def output_kind_for(path: Path) -> OutputKind:
    """Pick the output kind from the extension alone; PDF when unknown."""
    return OUTPUT_KINDS.get(Path(path).suffix.lower(), OutputKind.PDF)


class DocumentPipeline:
    """Orchestrates document normalization."""

    def __init__(
        self,
        reader: DocumentReaderPort,
        writer: DocumentWriterPort,
        reconciler: TemplateReconciler,
        documents: DocumentRepositoryPort,
        templates: TemplateRepositoryPort,
        options: ValidationOptions | None = None,
        persist_failures: bool = False,
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.reconciler = reconciler
        self.documents = documents
        self.templates = templates
        self.options = options or ValidationOptions()
        self.persist_failures = persist_failures

    async def normalize(self, request: NormalizeRequest) -> DocumentView:
        """Normalize a document into a template's structure.

        Pipeline:
            1. Validate the input file
            2. Check reader support
            3. Read original content
            4. Resolve template (file path first, then stored name)
            5. Reconcile via completion service
            6. Write output file (if requested)
            7. Persist the document record

        Raises DocumentError subclasses tagged with the failing stage.
        Nothing is persisted unless reconciliation (and the optional write)
        completes, except failed records when persist_failures is set.
        """
        path = Path(request.document_path).expanduser()
        stage = Stage.RECEIVED
        logger.info(f"Normalizing: {path.name} with template {request.template}")

        try:
            stage = Stage.VALIDATED
            warnings = self._validate(path)

            if not self.reader.is_supported(path):
                logger.error(f"Unsupported document format: {path.suffix}")
                raise UnsupportedFormatError(path.suffix)

            stage = Stage.READ
            content = await self._read(path)
            logger.debug(f"Document read, content length: {len(content)} characters")

            stage = Stage.TEMPLATE_RESOLVED
            template = await self._resolve_template(request.template)

            stage = Stage.RECONCILED
            document = Document.create(path.name, content)
            try:
                result = await self.reconciler.reconcile(content, template)
            except NormalizationError:
                logger.error(f"Normalization failed for {path.name}")
                if self.persist_failures:
                    document.mark_failed()
                    await self.documents.add(document)
                raise

            document.set_normalized_content(result.text)
            warnings.extend(result.warnings)
            logger.info(f"Document normalized: {document.id}")

            if request.output_path:
                await self._write(result.text, Path(request.output_path))

            stage = Stage.PERSISTED
            await self.documents.add(document)
            logger.info(f"Normalization completed for {path.name}")

            return DocumentView.from_document(document, warnings)

        except DocumentError as e:
            if e.stage is None:
                e.stage = stage.value
            logger.error(f"Normalization of {path.name} failed at stage {e.stage}: {e.message}")
            raise
        except asyncio.CancelledError:
            logger.warning(f"Normalization cancelled at stage {stage.value}: {path.name}")
            raise
        except Exception as e:
            logger.exception(f"Unexpected error during document processing: {e}")
            raise ProcessingError(
                f"Failed to process document: {path}", stage=stage.value
            ) from e

    async def get_document(self, document_id: uuid.UUID) -> DocumentView:
        document = await self.documents.get_by_id(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        return DocumentView.from_document(document)

    async def list_documents(self) -> list[DocumentView]:
        return [DocumentView.from_document(d) for d in await self.documents.list_all()]

    def _validate(self, path: Path) -> list[str]:
        verdict = validate_document(path, self.options)
        if not verdict.ok:
            logger.error(f"Document validation failed: {verdict.message}")
            raise ValidationFailedError(verdict.message)

        warnings = list(verdict.value.warnings) if verdict.value else []
        for warning in warnings:
            logger.warning(f"Document validation warning: {warning}")
        return warnings

    async def _read(self, path: Path) -> str:
        try:
            return await self.reader.read(path)
        except DocumentError:
            raise
        except Exception as e:
            raise ProcessingError(f"Could not read {path.name}: {e}") from e

    async def _resolve_template(self, identifier: str) -> str:
        candidate = Path(identifier).expanduser()
        if candidate.is_file():
            logger.debug(f"Reading template from file: {candidate}")
            try:
                return await read_template_file(self.reader, candidate)
            except Exception as e:
                raise ProcessingError(f"Could not read template {candidate}: {e}") from e

        logger.debug(f"Looking up stored template: {identifier}")
        template = await self.templates.get_by_name(identifier)
        if template is None:
            logger.error(f"Template not found: {identifier}")
            raise TemplateNotFoundError(identifier)
        return template.content

    async def _write(self, text: str, output_path: Path) -> None:
        kind = output_kind_for(output_path)
        logger.info(f"Saving document to {output_path} as {kind.value}")
        try:
            await self.writer.save(text, output_path, kind)
        except Exception as e:
            raise ProcessingError(f"Could not write {output_path}: {e}") from e


async def read_template_file(reader: DocumentReaderPort, path: Path) -> str:
    """Read a template file, as plain UTF-8 text when no reader handles it."""
    if reader.is_supported(path):
        return await reader.read(path)
    return await asyncio.to_thread(path.read_text, encoding="utf-8")
