"""Repository ports - storage for documents and templates."""

import uuid
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import Document, Template


class DocumentRepositoryPort(ABC):
    """Interface for document records. Updates are last-writer-wins."""

    @abstractmethod
    async def get_by_id(self, document_id: uuid.UUID) -> "Document | None":
        pass

    @abstractmethod
    async def list_all(self) -> list["Document"]:
        pass

    @abstractmethod
    async def add(self, document: "Document") -> "Document":
        pass

    @abstractmethod
    async def update(self, document: "Document") -> None:
        pass


class TemplateRepositoryPort(ABC):
    """Interface for stored templates. Names are unique, case-insensitive."""

    @abstractmethod
    async def get_by_id(self, template_id: uuid.UUID) -> "Template | None":
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> "Template | None":
        pass

    @abstractmethod
    async def list_all(self) -> list["Template"]:
        pass

    @abstractmethod
    async def add(self, template: "Template") -> "Template":
        pass

    @abstractmethod
    async def update(self, template: "Template") -> None:
        pass

    @abstractmethod
    async def delete(self, template_id: uuid.UUID) -> None:
        pass
