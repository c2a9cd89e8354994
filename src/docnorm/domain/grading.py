"""Output grading - score a generated document against its sources.

The validator never raises: read, completion and parse failures all become
low-confidence ValidationResults so a batch always completes.
"""

import asyncio
import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..ports.llm import CompletionPort, SamplingParams
from ..ports.reader import DocumentReaderPort
from .models import (
    BatchValidationResult,
    DocumentValidationResult,
    ValidationIssue,
    ValidationRequest,
    ValidationResult,
    utcnow,
)
from .placeholders import escape_placeholders
from .prompts import build_grading_prompt, strip_code_fence
from .services import read_template_file

logger = logging.getLogger(__name__)

PARSE_FAILURE_SUMMARY = "Failed to parse validation response"


def failure_result(message: str) -> ValidationResult:
    return ValidationResult(
        is_valid=False,
        confidence_score=0.0,
        summary=f"Validation failed: {message}",
        issues=[
            ValidationIssue(
                type="Error", field="System", description=message, severity="High"
            )
        ],
    )


def _normalize_key(key: str) -> str:
    return key.replace("_", "").lower()


def _lookup(data: dict[str, Any], name: str, default: Any = None) -> Any:
    """Case-insensitive key lookup, also matching snake_case spellings."""
    wanted = _normalize_key(name)
    for key, value in data.items():
        if isinstance(key, str) and _normalize_key(key) == wanted:
            return value
    return default


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return bool(value)


def _as_score(value: Any) -> float:
    try:
        score = float(value)
    except (TypeError, ValueError):
        return 0.0
    if score != score:  # NaN
        return 0.0
    return min(max(score, 0.0), 1.0)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def parse_grading_response(raw: str) -> ValidationResult:
    """Parse the completion service's JSON grading into a ValidationResult."""
    try:
        data = json.loads(strip_code_fence(raw))
    except (json.JSONDecodeError, RecursionError):
        logger.warning(f"Invalid JSON response: {raw[:200]}")
        return ValidationResult(is_valid=False, summary=PARSE_FAILURE_SUMMARY, raw_response=raw)

    if not isinstance(data, dict):
        logger.warning(f"Unexpected JSON response shape: {type(data).__name__}")
        return ValidationResult(is_valid=False, summary=PARSE_FAILURE_SUMMARY, raw_response=raw)

    raw_issues = _lookup(data, "issues")
    if not isinstance(raw_issues, list):
        raw_issues = []

    issues = []
    for item in raw_issues:
        if not isinstance(item, dict):
            continue
        issues.append(
            ValidationIssue(
                type=_as_text(_lookup(item, "type", "Other")) or "Other",
                field=_as_text(_lookup(item, "field")),
                description=_as_text(_lookup(item, "description")),
                severity=_as_text(_lookup(item, "severity", "Low")) or "Low",
            )
        )

    fields = _lookup(data, "extractedFields") or {}
    extracted = (
        {str(k): _as_text(v) for k, v in fields.items()} if isinstance(fields, dict) else {}
    )

    return ValidationResult(
        is_valid=_as_bool(_lookup(data, "isValid", False)),
        confidence_score=_as_score(_lookup(data, "confidenceScore", 0.0)),
        summary=_as_text(_lookup(data, "summary")),
        issues=issues,
        extracted_fields=extracted,
        recommendation=_as_text(_lookup(data, "recommendation")),
        raw_response=raw,
    )


class OutputValidator:
    """Grades normalized output for template compliance and content preservation."""

    def __init__(
        self,
        reader: DocumentReaderPort,
        completion: CompletionPort,
        params: SamplingParams | None = None,
        max_concurrent: int = 3,
    ) -> None:
        self.reader = reader
        self.completion = completion
        self.params = params or SamplingParams(temperature=0.3, max_tokens=2000)
        self.max_concurrent = max(1, max_concurrent)

    async def validate(
        self, original_path: Path, template_path: Path, generated_path: Path
    ) -> ValidationResult:
        try:
            original = await self.reader.read(Path(original_path))
            template = await read_template_file(self.reader, Path(template_path))
            generated = await self.reader.read(Path(generated_path))

            prompt = build_grading_prompt(
                original, escape_placeholders(template), escape_placeholders(generated)
            )
            raw = await self.completion.complete(prompt, self.params)
        except Exception as e:
            logger.error(f"Validation of {generated_path} failed: {e}")
            return failure_result(str(e))

        try:
            result = parse_grading_response(raw or "")
        except Exception as e:
            logger.warning(f"Unexpected grading response for {generated_path}: {e}")
            result = ValidationResult(
                is_valid=False, summary=PARSE_FAILURE_SUMMARY, raw_response=raw
            )
        result.validated_at = utcnow()
        logger.info(
            f"Validated {Path(generated_path).name}: valid={result.is_valid}, "
            f"confidence={result.confidence_score:.2f}, issues={len(result.issues)}"
        )
        return result

    async def validate_batch(
        self, requests: Iterable[ValidationRequest]
    ) -> BatchValidationResult:
        """Grade every request concurrently; results keep input order."""
        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def run(request: ValidationRequest) -> DocumentValidationResult:
            async with semaphore:
                result = await self.validate(
                    request.original_path, request.template_path, request.generated_path
                )
            return DocumentValidationResult(
                document_path=Path(request.original_path),
                template_name=Path(request.template_path).name,
                result=result,
            )

        results = list(await asyncio.gather(*(run(r) for r in requests)))

        valid = sum(1 for r in results if r.result.is_valid)
        average = (
            sum(r.result.confidence_score for r in results) / len(results) if results else 0.0
        )
        logger.info(f"Batch validation: {valid}/{len(results)} valid, avg={average:.2f}")

        return BatchValidationResult(
            total_documents=len(results),
            valid_documents=valid,
            invalid_documents=len(results) - valid,
            average_confidence_score=average,
            results=results,
            completed_at=utcnow(),
        )
