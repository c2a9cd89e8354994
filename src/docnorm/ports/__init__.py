"""Ports - interfaces for external dependencies."""

from .llm import CompletionPort, SamplingParams
from .reader import DocumentReaderPort
from .repository import DocumentRepositoryPort, TemplateRepositoryPort
from .writer import DocumentWriterPort

__all__ = [
    "CompletionPort",
    "DocumentReaderPort",
    "DocumentRepositoryPort",
    "DocumentWriterPort",
    "SamplingParams",
    "TemplateRepositoryPort",
]
