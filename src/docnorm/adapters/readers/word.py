"""Reader adapter for Word documents using python-docx."""

import asyncio
import logging
from pathlib import Path

import docx

from ...ports.reader import DocumentReaderPort

logger = logging.getLogger(__name__)


class DocxReader(DocumentReaderPort):
    """Reads paragraph and table text from .docx files."""

    def is_supported(self, path: Path) -> bool:
        return Path(path).suffix.lower() == ".docx"

    async def read(self, path: Path) -> str:
        return await asyncio.to_thread(self._extract, Path(path))

    def _extract(self, path: Path) -> str:
        logger.info(f"Extracting Word text: {path.name}")
        document = docx.Document(str(path))
        lines = [paragraph.text for paragraph in document.paragraphs]

        for table in document.tables:
            for row in table.rows:
                lines.append(" | ".join(cell.text.strip() for cell in row.cells))

        return "\n".join(lines).strip()
