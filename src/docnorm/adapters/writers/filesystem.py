"""Writer adapter rendering normalized text to local files."""

import asyncio
import html
import logging
from pathlib import Path

from ...domain.models import OutputKind
from ...ports.writer import DocumentWriterPort
from .blocks import split_blocks

logger = logging.getLogger(__name__)


def render_html(text: str, title: str = "Document") -> str:
    body = []
    for block in split_blocks(text):
        if block.kind == "heading":
            body.append(f"<h{block.level}>{html.escape(block.lines[0])}</h{block.level}>")
        elif block.kind in ("bullets", "numbered"):
            tag = "ul" if block.kind == "bullets" else "ol"
            items = "".join(f"<li>{html.escape(line)}</li>" for line in block.lines)
            body.append(f"<{tag}>{items}</{tag}>")
        else:
            body.append("<p>" + "<br>\n".join(html.escape(line) for line in block.lines) + "</p>")

    return (
        "<!DOCTYPE html>\n"
        '<html>\n<head>\n<meta charset="utf-8">\n'
        f"<title>{html.escape(title)}</title>\n"
        "</head>\n<body>\n" + "\n".join(body) + "\n</body>\n</html>\n"
    )


class FilesystemWriter(DocumentWriterPort):
    """Writes text, markdown, HTML, PDF (reportlab) and Word (python-docx)."""

    async def save(self, text: str, path: Path, kind: OutputKind) -> None:
        path = Path(path)
        await asyncio.to_thread(self._save, text, path, kind)
        logger.info(f"Saved {kind.value}: {path}")

    def _save(self, text: str, path: Path, kind: OutputKind) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)

        if kind in (OutputKind.TEXT, OutputKind.MARKDOWN):
            path.write_text(text, encoding="utf-8")
        elif kind == OutputKind.HTML:
            path.write_text(render_html(text, title=path.stem), encoding="utf-8")
        elif kind == OutputKind.PDF:
            from .pdf import write_pdf

            write_pdf(text, path)
        elif kind == OutputKind.WORD:
            from .word import write_docx

            write_docx(text, path)
        else:
            raise ValueError(f"Output type {kind} is not supported")
