"""Word rendering using python-docx."""

from pathlib import Path

import docx

from .blocks import split_blocks


def write_docx(text: str, path: Path) -> None:
    if path.suffix.lower() != ".docx":
        raise ValueError(f"Word output is only written as .docx, got {path.suffix}")

    document = docx.Document()
    for block in split_blocks(text):
        if block.kind == "heading":
            document.add_heading(block.lines[0], level=min(block.level, 9))
        elif block.kind == "bullets":
            for line in block.lines:
                document.add_paragraph(line, style="List Bullet")
        elif block.kind == "numbered":
            for line in block.lines:
                document.add_paragraph(line, style="List Number")
        else:
            document.add_paragraph("\n".join(block.lines))

    document.save(str(path))
