"""Storage adapters."""

from .filesystem import YamlDocumentRepository, default_output_path, sanitize_filename
from .memory import InMemoryDocumentRepository, InMemoryTemplateRepository

__all__ = [
    "InMemoryDocumentRepository",
    "InMemoryTemplateRepository",
    "YamlDocumentRepository",
    "default_output_path",
    "sanitize_filename",
]
