"""Pre-flight file checks.

All checks return a RuleResult; expected failures are never raised.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Generic, TypeVar

from .models import ValidationSummary

logger = logging.getLogger(__name__)

T = TypeVar("T")

DANGEROUS_EXTENSIONS = frozenset(
    {".exe", ".dll", ".bat", ".cmd", ".sh", ".ps1", ".vbs", ".js", ".jar"}
)
TEXT_EXTENSIONS = frozenset({".txt", ".md", ".json", ".xml", ".html", ".htm", ".csv"})
SNIFF_BYTES = 1024
BINARY_CONTENT_WARNING = "binary content in text file"

_MB = 1024 * 1024


def _expand(path: str | Path) -> Path:
    return Path(path).expanduser()


class RuleError(str, Enum):
    EMPTY_PATH = "EmptyPath"
    NOT_FOUND = "NotFound"
    INVALID_PATH = "InvalidPath"
    TOO_LARGE = "TooLarge"
    EMPTY = "Empty"
    DANGEROUS_EXTENSION = "DangerousExtension"
    EXTENSION_NOT_ALLOWED = "ExtensionNotAllowed"


@dataclass
class RuleResult(Generic[T]):
    """Pass/fail verdict with a human-readable reason."""

    ok: bool
    error: RuleError | None = None
    message: str = ""
    value: T | None = None

    @classmethod
    def success(cls, value: T | None = None) -> "RuleResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: RuleError, message: str) -> "RuleResult[T]":
        return cls(ok=False, error=error, message=message)


@dataclass
class ValidationOptions:
    max_size_bytes: int = 50 * _MB
    allowed_extensions: list[str] = field(default_factory=list)
    check_content: bool = True


def validate_path(path: str | Path | None) -> RuleResult[None]:
    if path is None or not str(path).strip():
        logger.warning("File path validation failed: empty path")
        return RuleResult.failure(RuleError.EMPTY_PATH, "File path cannot be empty")

    try:
        resolved = _expand(path).resolve()
        exists = resolved.is_file()
    except (OSError, ValueError, RuntimeError) as e:
        logger.warning(f"Invalid file path {path!r}: {e}")
        return RuleResult.failure(RuleError.INVALID_PATH, f"Invalid file path: {e}")

    if not exists:
        logger.warning(f"File path validation failed: file not found {path}")
        return RuleResult.failure(RuleError.NOT_FOUND, f"File not found: {path}")

    return RuleResult.success()


def validate_size(path: str | Path, max_bytes: int) -> RuleResult[None]:
    try:
        size = _expand(path).stat().st_size
    except (OSError, ValueError) as e:
        logger.warning(f"Could not check file size for {path}: {e}")
        return RuleResult.failure(
            RuleError.INVALID_PATH, f"Could not check file size: {e}"
        )

    if size > max_bytes:
        size_mb = size / _MB
        max_mb = max_bytes / _MB
        logger.warning(f"File too large: {path} is {size_mb:.2f}MB, max is {max_mb:.2f}MB")
        return RuleResult.failure(
            RuleError.TOO_LARGE, f"File too large: {size_mb:.2f}MB (max: {max_mb:.2f}MB)"
        )

    if size == 0:
        logger.warning(f"Empty file: {path}")
        return RuleResult.failure(RuleError.EMPTY, "File is empty")

    return RuleResult.success()


def validate_extension(
    path: str | Path, allowed_extensions: list[str] | None = None
) -> RuleResult[None]:
    extension = Path(path).suffix.lower()

    # Deny-list wins over any allow-list
    if extension in DANGEROUS_EXTENSIONS:
        logger.warning(f"Dangerous file extension detected: {extension}")
        return RuleResult.failure(
            RuleError.DANGEROUS_EXTENSION,
            f"File type not allowed for security reasons: {extension}",
        )

    if allowed_extensions:
        allowed = {e.lower() for e in allowed_extensions}
        if extension not in allowed:
            logger.warning(f"File extension {extension} not in allowed list")
            return RuleResult.failure(
                RuleError.EXTENSION_NOT_ALLOWED,
                f"File type not supported: {extension or '(none)'}",
            )

    return RuleResult.success()


def validate_document(
    path: str | Path, options: ValidationOptions | None = None
) -> RuleResult[ValidationSummary]:
    """Run path, size and extension checks, then sniff the content.

    Stops at the first failing check. Content problems only add warnings.
    """
    options = options or ValidationOptions()
    file_path = _expand(path) if path is not None and str(path).strip() else path

    checks = (
        lambda: validate_path(file_path),
        lambda: validate_size(file_path, options.max_size_bytes),
        lambda: validate_extension(file_path, options.allowed_extensions),
    )
    for check in checks:
        result = check()
        if not result.ok:
            return RuleResult(ok=False, error=result.error, message=result.message)

    summary = ValidationSummary(
        file_path=file_path,
        size_bytes=file_path.stat().st_size,
        extension=file_path.suffix.lower(),
        is_valid=True,
    )

    if options.check_content:
        summary.warnings.extend(_sniff_content(file_path, summary.extension))

    logger.info(
        f"Document validation completed for {file_path}: valid={summary.is_valid}, "
        f"size={summary.size_bytes} bytes, warnings={len(summary.warnings)}"
    )
    return RuleResult.success(summary)


def _sniff_content(path: Path, extension: str) -> list[str]:
    warnings = []
    try:
        with open(path, "rb") as f:
            sample = f.read(SNIFF_BYTES)
    except OSError as e:
        logger.warning(f"Error reading file content for {path}: {e}")
        return [f"could not verify file content: {e}"]

    if extension in TEXT_EXTENSIONS and b"\x00" in sample:
        warnings.append(BINARY_CONTENT_WARNING)

    return warnings
