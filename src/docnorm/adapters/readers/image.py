"""Reader adapter for images using the Tesseract binary."""

import asyncio
import logging
from pathlib import Path

import pytesseract
from PIL import Image

from ...ports.reader import DocumentReaderPort

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".bmp", ".gif", ".tiff", ".tif")


class TesseractImageReader(DocumentReaderPort):
    """Delegates image text recognition to Tesseract."""

    def __init__(self, lang: str = "eng") -> None:
        self.lang = lang

    def is_supported(self, path: Path) -> bool:
        return Path(path).suffix.lower() in IMAGE_EXTENSIONS

    async def read(self, path: Path) -> str:
        return await asyncio.to_thread(self._extract, Path(path))

    def _extract(self, path: Path) -> str:
        logger.info(f"Running OCR: {path.name}")
        with Image.open(path) as image:
            text = pytesseract.image_to_string(image, lang=self.lang, config="--psm 3")
        return text.strip()
