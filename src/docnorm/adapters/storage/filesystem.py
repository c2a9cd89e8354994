"""Storage adapters using the local filesystem."""

import asyncio
import logging
import re
import uuid
from datetime import datetime
from pathlib import Path

import yaml

from ...domain.models import Document, DocumentStatus
from ...ports.repository import DocumentRepositoryPort

logger = logging.getLogger(__name__)


def sanitize_filename(name: str, max_length: int = 180) -> str:
    """Remove/replace characters invalid in filenames."""
    # Remove null bytes
    name = name.replace("\x00", "")
    # Replace path traversal attempts
    name = name.replace("..", "_")
    # Replace problematic characters
    name = re.sub(r'[<>:"/\\|?*]', "_", name)
    # Collapse multiple spaces/underscores
    name = re.sub(r"[_\s]+", " ", name)
    # Remove leading/trailing dots and spaces
    name = name.strip(". ")
    # Limit length (leave room for suffix + extension)
    if len(name) > max_length:
        name = name[:max_length].rsplit(" ", 1)[0]
    return name or "Untitled"


def default_output_path(output_dir: Path, source: Path, extension: str) -> Path:
    """Build ``output_dir/<stem> - normalized.<ext>`` without clobbering files."""
    stem = sanitize_filename(source.stem)
    extension = extension if extension.startswith(".") else f".{extension}"
    dest = output_dir / f"{stem} - normalized{extension}"

    counter = 1
    while dest.exists():
        dest = output_dir / f"{stem} - normalized ({counter}){extension}"
        counter += 1
    return dest


def _document_to_dict(document: Document) -> dict:
    return {
        "id": str(document.id),
        "file_name": document.file_name,
        "status": document.status.value,
        "created_at": document.created_at.isoformat(),
        "normalized_at": document.normalized_at.isoformat() if document.normalized_at else None,
        "original_content": document.original_content,
        "normalized_content": document.normalized_content,
    }


def _document_from_dict(data: dict) -> Document:
    normalized_at = data.get("normalized_at")
    return Document(
        id=uuid.UUID(data["id"]),
        file_name=data["file_name"],
        original_content=data.get("original_content") or "",
        normalized_content=data.get("normalized_content"),
        created_at=datetime.fromisoformat(data["created_at"]),
        normalized_at=datetime.fromisoformat(normalized_at) if normalized_at else None,
        status=DocumentStatus(data.get("status", DocumentStatus.PENDING.value)),
    )


class YamlDocumentRepository(DocumentRepositoryPort):
    """Document history stored as a YAML list, rewritten on every change."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = asyncio.Lock()

    def _load(self) -> dict[uuid.UUID, Document]:
        if not self.path.exists():
            return {}
        data = yaml.safe_load(self.path.read_text(encoding="utf-8")) or []
        documents = {}
        for entry in data:
            try:
                document = _document_from_dict(entry)
            except (KeyError, ValueError, TypeError) as e:
                logger.warning(f"Skipping malformed history entry in {self.path}: {e}")
                continue
            documents[document.id] = document
        return documents

    def _dump(self, documents: dict[uuid.UUID, Document]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(
            yaml.safe_dump(
                [_document_to_dict(d) for d in documents.values()],
                allow_unicode=True,
                sort_keys=False,
            ),
            encoding="utf-8",
        )
        tmp.replace(self.path)

    async def get_by_id(self, document_id: uuid.UUID) -> Document | None:
        async with self._lock:
            documents = await asyncio.to_thread(self._load)
        return documents.get(document_id)

    async def list_all(self) -> list[Document]:
        async with self._lock:
            documents = await asyncio.to_thread(self._load)
        return list(documents.values())

    async def add(self, document: Document) -> Document:
        async with self._lock:
            documents = await asyncio.to_thread(self._load)
            documents[document.id] = document
            await asyncio.to_thread(self._dump, documents)
        logger.debug(f"Stored document {document.id} in {self.path}")
        return document

    async def update(self, document: Document) -> None:
        async with self._lock:
            documents = await asyncio.to_thread(self._load)
            if document.id not in documents:
                return
            documents[document.id] = document
            await asyncio.to_thread(self._dump, documents)
