"""Reader port - interface for turning files into text."""

from abc import ABC, abstractmethod
from pathlib import Path


class DocumentReaderPort(ABC):
    """Interface for document text extraction."""

    @abstractmethod
    def is_supported(self, path: Path) -> bool:
        """Check whether this reader handles the file's extension."""
        pass

    @abstractmethod
    async def read(self, path: Path) -> str:
        """Extract text content from the file."""
        pass
