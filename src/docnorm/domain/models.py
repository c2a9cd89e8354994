"""Domain models."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from .errors import InvalidStateError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentStatus(str, Enum):
    PENDING = "Pending"
    NORMALIZED = "Normalized"
    FAILED = "Failed"


class TemplateType(str, Enum):
    LEGAL = "Legal"
    MEDICAL = "Medical"
    BUSINESS = "Business"
    TECHNICAL = "Technical"
    GENERAL = "General"


class OutputKind(str, Enum):
    """Rendering target for normalized content."""

    PDF = "pdf"
    WORD = "word"
    HTML = "html"
    TEXT = "text"
    MARKDOWN = "markdown"


@dataclass
class Document:
    """One normalization unit.

    Status moves from PENDING to either NORMALIZED or FAILED exactly once.
    Normalizing again means creating a new Document.
    """

    file_name: str
    original_content: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    normalized_content: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    normalized_at: datetime | None = None
    status: DocumentStatus = DocumentStatus.PENDING

    @classmethod
    def create(cls, file_name: str, original_content: str) -> "Document":
        return cls(file_name=file_name, original_content=original_content)

    def set_normalized_content(self, content: str) -> None:
        self._ensure_pending()
        self.normalized_content = content
        self.normalized_at = utcnow()
        self.status = DocumentStatus.NORMALIZED

    def mark_failed(self) -> None:
        self._ensure_pending()
        self.status = DocumentStatus.FAILED

    def _ensure_pending(self) -> None:
        if self.status != DocumentStatus.PENDING:
            raise InvalidStateError(
                f"Document {self.id} is already {self.status.value}"
            )


@dataclass
class Template:
    """Reusable target structure with {{placeholder}} tokens."""

    name: str
    content: str
    description: str = ""
    type: TemplateType = TemplateType.GENERAL
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime | None = None

    def update(self, name: str, content: str, description: str) -> None:
        self.name = name
        self.content = content
        self.description = description
        self.updated_at = utcnow()


@dataclass
class DocumentView:
    """Read-only projection of a Document returned to callers."""

    id: uuid.UUID
    file_name: str
    original_content: str
    normalized_content: str | None
    created_at: datetime
    normalized_at: datetime | None
    status: str
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_document(
        cls, document: Document, warnings: list[str] | None = None
    ) -> "DocumentView":
        return cls(
            id=document.id,
            file_name=document.file_name,
            original_content=document.original_content,
            normalized_content=document.normalized_content,
            created_at=document.created_at,
            normalized_at=document.normalized_at,
            status=document.status.value,
            warnings=list(warnings or []),
        )


@dataclass
class NormalizeRequest:
    document_path: Path
    template: str
    output_path: Path | None = None


@dataclass
class ValidationSummary:
    """Outcome of pre-flight file checks. Never persisted."""

    file_path: Path
    size_bytes: int = 0
    extension: str = ""
    is_valid: bool = True
    warnings: list[str] = field(default_factory=list)


@dataclass
class ValidationIssue:
    type: str = "Other"  # Missing, Incorrect, Formatting, Error, Other
    field: str = ""
    description: str = ""
    severity: str = "Low"  # Low, Medium, High


@dataclass
class ValidationResult:
    """Grading of one generated document."""

    is_valid: bool = False
    confidence_score: float = 0.0
    summary: str = ""
    issues: list[ValidationIssue] = field(default_factory=list)
    extracted_fields: dict[str, str] = field(default_factory=dict)
    recommendation: str = ""
    validated_at: datetime = field(default_factory=utcnow)
    raw_response: str | None = None


@dataclass
class ValidationRequest:
    original_path: Path
    template_path: Path
    generated_path: Path
    expected_path: Path | None = None


@dataclass
class DocumentValidationResult:
    document_path: Path
    template_name: str
    result: ValidationResult


@dataclass
class BatchValidationResult:
    total_documents: int = 0
    valid_documents: int = 0
    invalid_documents: int = 0
    average_confidence_score: float = 0.0
    results: list[DocumentValidationResult] = field(default_factory=list)
    completed_at: datetime = field(default_factory=utcnow)
