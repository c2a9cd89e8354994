"""Writer port - interface for rendering normalized text."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import OutputKind


class DocumentWriterPort(ABC):
    """Interface for rendering text into an output file."""

    @abstractmethod
    async def save(self, text: str, path: Path, kind: "OutputKind") -> None:
        """Write text to path in the given output kind.

        Raises on unsupported kind or I/O error.
        """
        pass
