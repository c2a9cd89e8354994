"""Domain layer - core business logic."""

from .errors import DocumentError
from .models import (
    BatchValidationResult,
    Document,
    DocumentStatus,
    DocumentView,
    NormalizeRequest,
    OutputKind,
    Template,
    TemplateType,
    ValidationRequest,
    ValidationResult,
)

__all__ = [
    "BatchValidationResult",
    "Document",
    "DocumentError",
    "DocumentStatus",
    "DocumentView",
    "NormalizeRequest",
    "OutputKind",
    "Template",
    "TemplateType",
    "ValidationRequest",
    "ValidationResult",
]
