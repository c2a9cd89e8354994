"""Reader that dispatches to the first supporting reader."""

from pathlib import Path

from ...ports.reader import DocumentReaderPort


class CompositeReader(DocumentReaderPort):
    """Tries readers in registration order."""

    def __init__(self, readers: list[DocumentReaderPort]) -> None:
        self.readers = list(readers)

    def is_supported(self, path: Path) -> bool:
        return any(r.is_supported(path) for r in self.readers)

    async def read(self, path: Path) -> str:
        for reader in self.readers:
            if reader.is_supported(path):
                return await reader.read(path)
        raise ValueError(f"File type not supported: {Path(path).suffix}")
