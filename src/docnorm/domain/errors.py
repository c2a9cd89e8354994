"""Domain errors raised at the pipeline boundary.

Every error carries a stable ``code`` for presentation and, when raised by
the pipeline, the ``stage`` it failed in.
"""


class DocumentError(Exception):
    """Base class for all domain errors."""

    code = "DOCUMENT_ERROR"

    def __init__(self, message: str, stage: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage


class ValidationFailedError(DocumentError):
    code = "VALIDATION_FAILED"

    def __init__(self, reason: str, stage: str | None = None) -> None:
        super().__init__(f"Document validation failed: {reason}", stage)
        self.reason = reason


class UnsupportedFormatError(DocumentError):
    code = "INVALID_FORMAT"

    def __init__(self, extension: str, stage: str | None = None) -> None:
        super().__init__(f"Invalid document format: {extension or '(none)'}", stage)
        self.extension = extension


class TemplateNotFoundError(DocumentError):
    code = "TEMPLATE_NOT_FOUND"

    def __init__(self, name: str, stage: str | None = None) -> None:
        super().__init__(f"Template not found: {name}", stage)
        self.name = name


class NormalizationError(DocumentError):
    code = "NORMALIZATION_ERROR"

    def __init__(self, message: str, stage: str | None = None) -> None:
        super().__init__(f"Normalization failed: {message}", stage)


class ProcessingError(DocumentError):
    code = "PROCESSING_ERROR"

    def __init__(self, message: str, stage: str | None = None) -> None:
        super().__init__(f"Error processing document: {message}", stage)


class DocumentNotFoundError(DocumentError):
    code = "DOCUMENT_NOT_FOUND"

    def __init__(self, document_id: object) -> None:
        super().__init__(f"Document with ID {document_id} not found")
        self.document_id = document_id


class DuplicateTemplateError(DocumentError):
    code = "DUPLICATE_TEMPLATE"

    def __init__(self, name: str) -> None:
        super().__init__(f"Template already exists: {name}")
        self.name = name


class InvalidStateError(DocumentError):
    code = "INVALID_STATE"
