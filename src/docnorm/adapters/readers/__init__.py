"""Document reader adapters."""

from ...ports.reader import DocumentReaderPort
from .composite import CompositeReader
from .text import TextFileReader

__all__ = ["CompositeReader", "TextFileReader", "create_reader"]


def create_reader() -> DocumentReaderPort:
    """Create the default reader chain: text, PDF, Word, image."""
    from .image import TesseractImageReader
    from .pdf import PdfPlumberReader
    from .word import DocxReader

    return CompositeReader(
        [TextFileReader(), PdfPlumberReader(), DocxReader(), TesseractImageReader()]
    )
