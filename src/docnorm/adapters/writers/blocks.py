"""Split normalized text into simple layout blocks.

Recognizes ``#`` headings, ``-``/``*`` bullet lists and ``1.`` numbered
lists; everything else is a paragraph. Blocks are separated by blank lines.
"""

import re
from dataclasses import dataclass, field

_HEADING = re.compile(r"^(#{1,6})\s+(.*)$")
_BULLET = re.compile(r"^\s*[-*]\s+(.*)$")
_NUMBERED = re.compile(r"^\s*\d+\.\s*(.*)$")


@dataclass
class Block:
    kind: str  # heading, bullets, numbered, paragraph
    lines: list[str] = field(default_factory=list)
    level: int = 0


def split_blocks(text: str) -> list[Block]:
    blocks = []
    for chunk in re.split(r"\r?\n\s*\r?\n", text.strip()):
        lines = [line.rstrip() for line in chunk.splitlines() if line.strip()]
        if not lines:
            continue

        heading = _HEADING.match(lines[0].strip())
        if heading:
            blocks.append(Block("heading", [heading.group(2)], level=len(heading.group(1))))
            lines = lines[1:]
            if not lines:
                continue

        if all(_BULLET.match(line) for line in lines):
            blocks.append(Block("bullets", [_BULLET.match(line).group(1) for line in lines]))
        elif all(_NUMBERED.match(line) for line in lines):
            blocks.append(Block("numbered", [_NUMBERED.match(line).group(1) for line in lines]))
        else:
            blocks.append(Block("paragraph", lines))
    return blocks
