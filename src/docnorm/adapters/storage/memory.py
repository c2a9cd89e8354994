"""In-memory repositories keyed by id."""

import asyncio
import logging
import uuid

from ...domain.errors import DuplicateTemplateError
from ...domain.models import Document, Template
from ...ports.repository import DocumentRepositoryPort, TemplateRepositoryPort
from .defaults import default_templates

logger = logging.getLogger(__name__)


class InMemoryDocumentRepository(DocumentRepositoryPort):
    def __init__(self) -> None:
        self._documents: dict[uuid.UUID, Document] = {}
        self._lock = asyncio.Lock()

    async def get_by_id(self, document_id: uuid.UUID) -> Document | None:
        async with self._lock:
            return self._documents.get(document_id)

    async def list_all(self) -> list[Document]:
        async with self._lock:
            return list(self._documents.values())

    async def add(self, document: Document) -> Document:
        async with self._lock:
            self._documents[document.id] = document
        return document

    async def update(self, document: Document) -> None:
        async with self._lock:
            if document.id in self._documents:
                self._documents[document.id] = document


class InMemoryTemplateRepository(TemplateRepositoryPort):
    """Template store; seeded with the built-in templates unless told otherwise."""

    def __init__(self, templates: list[Template] | None = None, seed: bool = True) -> None:
        self._templates: dict[uuid.UUID, Template] = {}
        self._lock = asyncio.Lock()
        initial = list(templates or [])
        if seed:
            initial = default_templates() + initial
        for template in initial:
            self._check_unique(template)
            self._templates[template.id] = template

    def _check_unique(self, template: Template) -> None:
        wanted = template.name.casefold()
        for existing in self._templates.values():
            if existing.id != template.id and existing.name.casefold() == wanted:
                raise DuplicateTemplateError(template.name)

    async def get_by_id(self, template_id: uuid.UUID) -> Template | None:
        async with self._lock:
            return self._templates.get(template_id)

    async def get_by_name(self, name: str) -> Template | None:
        wanted = name.casefold()
        async with self._lock:
            for template in self._templates.values():
                if template.name.casefold() == wanted:
                    return template
        return None

    async def list_all(self) -> list[Template]:
        async with self._lock:
            return list(self._templates.values())

    async def add(self, template: Template) -> Template:
        async with self._lock:
            self._check_unique(template)
            self._templates[template.id] = template
        logger.debug(f"Added template: {template.name}")
        return template

    async def update(self, template: Template) -> None:
        async with self._lock:
            if template.id not in self._templates:
                return
            self._check_unique(template)
            self._templates[template.id] = template

    async def delete(self, template_id: uuid.UUID) -> None:
        async with self._lock:
            self._templates.pop(template_id, None)
