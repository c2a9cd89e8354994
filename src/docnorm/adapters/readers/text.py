"""Reader adapter for plain text files."""

import asyncio
from pathlib import Path

from ...ports.reader import DocumentReaderPort

TEXT_EXTENSIONS = (".txt", ".text", ".log", ".md", ".markdown", ".csv", ".json", ".xml", ".html", ".htm")


class TextFileReader(DocumentReaderPort):
    """Reads UTF-8 text files, replacing undecodable bytes."""

    def __init__(self, extensions: tuple[str, ...] = TEXT_EXTENSIONS) -> None:
        self.extensions = extensions

    def is_supported(self, path: Path) -> bool:
        return Path(path).suffix.lower() in self.extensions

    async def read(self, path: Path) -> str:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return await asyncio.to_thread(path.read_text, encoding="utf-8", errors="replace")
