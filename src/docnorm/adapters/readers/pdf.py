"""Reader adapter for PDF files using pdfplumber."""

import asyncio
import logging
from pathlib import Path

import pdfplumber

from ...ports.reader import DocumentReaderPort

logger = logging.getLogger(__name__)


class PdfPlumberReader(DocumentReaderPort):
    """Extracts the text layer of a PDF. Scanned PDFs without one read as empty."""

    def is_supported(self, path: Path) -> bool:
        return Path(path).suffix.lower() == ".pdf"

    async def read(self, path: Path) -> str:
        return await asyncio.to_thread(self._extract, Path(path))

    def _extract(self, path: Path) -> str:
        logger.info(f"Extracting PDF text: {path.name}")
        with pdfplumber.open(path) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
        text = "\n".join(pages).strip()
        if not text:
            logger.warning(f"No text layer found in {path.name}")
        return text
