"""Template placeholder handling.

A placeholder is exactly ``{{identifier}}`` with ``identifier`` made of word
characters. Runs of more than two braces (``{{{x}}}``, ``{{{{x}}}}``) and
tokens with inner whitespace are not placeholders.
"""

import re

PLACEHOLDER_PATTERN = re.compile(r"(?<!\{)\{\{(\w+)\}\}(?!\})")

ESCAPED_OPEN = "[["
ESCAPED_CLOSE = "]]"


def extract_placeholders(text: str) -> list[str]:
    """Return placeholder names in order of first appearance, without duplicates."""
    if not text:
        return []
    return list(dict.fromkeys(PLACEHOLDER_PATTERN.findall(text)))


def escape_placeholders(text: str) -> str:
    """Rewrite ``{{`` / ``}}`` as ``[[`` / ``]]`` so prompts carry no template syntax."""
    return text.replace("{{", ESCAPED_OPEN).replace("}}", ESCAPED_CLOSE)


def find_surviving_markers(output: str, names: list[str]) -> list[str]:
    """Names whose ``{{name}}`` or ``[[name]]`` form is still present in output."""
    return [
        name
        for name in names
        if f"{{{{{name}}}}}" in output or f"{ESCAPED_OPEN}{name}{ESCAPED_CLOSE}" in output
    ]
