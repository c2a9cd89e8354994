"""PDF rendering using reportlab."""

from pathlib import Path
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import ListFlowable, ListItem, Paragraph, SimpleDocTemplate, Spacer

from .blocks import split_blocks


def write_pdf(text: str, path: Path) -> None:
    styles = getSampleStyleSheet()
    story = []

    for block in split_blocks(text):
        if block.kind == "heading":
            style = styles[f"Heading{min(block.level, 3)}"]
            story.append(Paragraph(escape(block.lines[0]), style))
        elif block.kind in ("bullets", "numbered"):
            items = [ListItem(Paragraph(escape(line), styles["BodyText"])) for line in block.lines]
            bullet_type = "bullet" if block.kind == "bullets" else "1"
            story.append(ListFlowable(items, bulletType=bullet_type))
        else:
            story.append(
                Paragraph("<br/>".join(escape(line) for line in block.lines), styles["BodyText"])
            )
        story.append(Spacer(1, 6))

    doc = SimpleDocTemplate(str(path), pagesize=A4, title=path.stem)
    doc.build(story)
