"""CLI entry point for docnorm."""

import asyncio
import json
import logging
import sys
import traceback
import uuid
from dataclasses import asdict
from pathlib import Path

import click
import yaml

from .adapters.llm import create_completion_adapter
from .adapters.readers import create_reader
from .adapters.storage import (
    InMemoryTemplateRepository,
    YamlDocumentRepository,
    default_output_path,
)
from .adapters.writers import FilesystemWriter
from .config import Settings, load_settings
from .domain.errors import DocumentError
from .domain.grading import OutputValidator
from .domain.models import (
    BatchValidationResult,
    DocumentView,
    NormalizeRequest,
    ValidationRequest,
    ValidationResult,
)
from .domain.placeholders import extract_placeholders
from .domain.reconciler import TemplateReconciler
from .domain.rules import ValidationOptions
from .domain.services import DocumentPipeline
from .ports.llm import SamplingParams

logger = logging.getLogger(__name__)

FORMAT_EXTENSIONS = {"pdf": ".pdf", "docx": ".docx", "html": ".html", "txt": ".txt", "md": ".md"}


def setup_logging(verbose: bool = False, log_file: Path | None = None) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def build_pipeline(settings: Settings) -> DocumentPipeline:
    """Wire the pipeline from configured adapters."""
    completion = create_completion_adapter(settings.llm)
    reconciler = TemplateReconciler(
        completion,
        params=SamplingParams(
            temperature=settings.llm.temperature,
            max_tokens=settings.llm.normalize_max_tokens,
        ),
        strict=settings.processing.strict_placeholders,
    )
    return DocumentPipeline(
        reader=create_reader(),
        writer=FilesystemWriter(),
        reconciler=reconciler,
        documents=YamlDocumentRepository(settings.paths.history_file),
        templates=InMemoryTemplateRepository(),
        options=ValidationOptions(
            max_size_bytes=settings.processing.max_file_size_bytes,
            allowed_extensions=settings.processing.allowed_extensions,
            check_content=settings.processing.check_content,
        ),
        persist_failures=settings.processing.persist_failures,
    )


def build_validator(settings: Settings) -> OutputValidator:
    return OutputValidator(
        reader=create_reader(),
        completion=create_completion_adapter(settings.llm),
        params=SamplingParams(
            temperature=settings.llm.temperature,
            max_tokens=settings.llm.validate_max_tokens,
        ),
        max_concurrent=settings.processing.max_concurrent_documents,
    )


def load_manifest(path: Path) -> list[ValidationRequest]:
    """Load a YAML list of {original, template, generated[, expected]} entries.

    Relative paths are resolved against the manifest's directory.
    """
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return []
    if not isinstance(data, list):
        raise click.BadParameter("Manifest must be a list of entries")

    base = path.parent

    def resolve(value: str) -> Path:
        p = Path(value).expanduser()
        return p if p.is_absolute() else base / p

    requests = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise click.BadParameter(f"Manifest entry {index} is not a mapping")
        missing = [k for k in ("original", "template", "generated") if not entry.get(k)]
        if missing:
            raise click.BadParameter(
                f"Manifest entry {index} is missing: {', '.join(missing)}"
            )
        requests.append(
            ValidationRequest(
                original_path=resolve(entry["original"]),
                template_path=resolve(entry["template"]),
                generated_path=resolve(entry["generated"]),
                expected_path=resolve(entry["expected"]) if entry.get("expected") else None,
            )
        )
    return requests


def resolve_output_path(
    document: Path, output: Path | None, fmt: str | None, output_dir: Path
) -> Path | None:
    """Explicit output wins; otherwise --format picks a file in output_dir."""
    if output:
        return output
    if fmt:
        return default_output_path(output_dir, document, FORMAT_EXTENSIONS[fmt])
    return None


def sort_newest_first(documents: list[DocumentView]) -> list[DocumentView]:
    return sorted(documents, key=lambda d: d.created_at, reverse=True)


def _jsonable(value: object) -> object:
    return json.loads(json.dumps(value, default=str))


def report_error(error: DocumentError, show_details: bool) -> None:
    click.echo(f"Error [{error.code}]: {error.message}", err=True)
    if error.stage:
        click.echo(f"  failed at stage: {error.stage}", err=True)
    if show_details:
        click.echo("".join(traceback.format_exception(error)), err=True)


def echo_validation(result: ValidationResult) -> None:
    mark = "✓" if result.is_valid else "✗"
    click.echo(f"{mark} valid={result.is_valid} confidence={result.confidence_score:.2f}")
    if result.summary:
        click.echo(f"summary: {result.summary}")
    for issue in result.issues:
        click.echo(f"  [{issue.severity}] {issue.type} {issue.field}: {issue.description}")
    if result.recommendation:
        click.echo(f"recommendation: {result.recommendation}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("-c", "--config", type=click.Path(exists=True), help="Config file path")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """docnorm - normalize documents into templates."""
    settings = load_settings(Path(config) if config else None)
    setup_logging(verbose, settings.paths.log_file)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["verbose"] = verbose


@cli.command()
@click.argument("document", type=click.Path(path_type=Path))
@click.argument("template")
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Output file path")
@click.option(
    "-f", "--format", "fmt", type=click.Choice(sorted(FORMAT_EXTENSIONS)),
    help="Write to the configured output directory in this format",
)
@click.option("--show-details", is_flag=True, help="Show error tracebacks")
@click.pass_context
def normalize(
    ctx: click.Context,
    document: Path,
    template: str,
    output: Path | None,
    fmt: str | None,
    show_details: bool,
) -> None:
    """Normalize DOCUMENT into TEMPLATE (stored name or template file)."""
    settings: Settings = ctx.obj["settings"]
    output_path = resolve_output_path(document, output, fmt, settings.paths.output_dir)
    request = NormalizeRequest(document_path=document, template=template, output_path=output_path)

    # Wire up adapters
    pipeline = build_pipeline(settings)

    try:
        result = asyncio.run(
            asyncio.wait_for(
                pipeline.normalize(request),
                timeout=settings.processing.processing_timeout_seconds,
            )
        )
    except DocumentError as e:
        report_error(e, show_details or ctx.obj["verbose"])
        sys.exit(1)
    except TimeoutError:
        click.echo(
            f"Error [TIMEOUT]: processing exceeded "
            f"{settings.processing.processing_timeout_seconds}s",
            err=True,
        )
        sys.exit(1)

    click.echo(f"id: {result.id}")
    click.echo(f"status: {result.status}")
    for warning in result.warnings:
        click.echo(f"warning: {warning}", err=True)

    if output_path:
        click.echo(f"output: {output_path}")
    else:
        click.echo("\n--- Normalized Content ---")
        click.echo(result.normalized_content)
        click.echo("--- End of Content ---")


@cli.command()
def templates() -> None:
    """List built-in templates."""
    repository = InMemoryTemplateRepository()
    stored = asyncio.run(repository.list_all())

    if not stored:
        click.echo("No templates available")
        return

    for template in stored:
        click.echo(f"{template.name}")
        click.echo(f"  type: {template.type.value}")
        click.echo(f"  description: {template.description}")
        click.echo(f"  created: {template.created_at:%Y-%m-%d}")
        click.echo(f"  placeholders: {', '.join(extract_placeholders(template.content))}")
    click.echo("\nA template file path may be given instead of a name.")


@cli.command()
@click.pass_context
def history(ctx: click.Context) -> None:
    """List normalized documents, newest first."""
    settings: Settings = ctx.obj["settings"]
    repository = YamlDocumentRepository(settings.paths.history_file)
    documents = [DocumentView.from_document(d) for d in asyncio.run(repository.list_all())]

    if not documents:
        click.echo("No documents processed yet")
        return

    for doc in sort_newest_first(documents):
        click.echo(f"ID: {doc.id}")
        click.echo(f"File: {doc.file_name}")
        click.echo(f"Status: {doc.status}")
        click.echo(f"Created: {doc.created_at:%Y-%m-%d %H:%M:%S}")
        if doc.normalized_at:
            click.echo(f"Normalized: {doc.normalized_at:%Y-%m-%d %H:%M:%S}")
        click.echo("-" * 50)


@cli.command()
@click.argument("document_id")
@click.pass_context
def show(ctx: click.Context, document_id: str) -> None:
    """Show one stored document."""
    settings: Settings = ctx.obj["settings"]
    try:
        key = uuid.UUID(document_id)
    except ValueError:
        raise click.BadParameter(f"Not a document ID: {document_id}")

    pipeline = build_pipeline(settings)
    try:
        doc = asyncio.run(pipeline.get_document(key))
    except DocumentError as e:
        report_error(e, ctx.obj["verbose"])
        sys.exit(1)

    click.echo(f"file: {doc.file_name}")
    click.echo(f"status: {doc.status}")
    click.echo(f"created: {doc.created_at:%Y-%m-%d %H:%M:%S}")
    click.echo("\n--- Normalized Content ---")
    click.echo(doc.normalized_content or "")
    click.echo("--- End of Content ---")


@cli.command()
@click.argument("original", type=click.Path(exists=True, path_type=Path))
@click.argument("template", type=click.Path(exists=True, path_type=Path))
@click.argument("generated", type=click.Path(exists=True, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON")
@click.pass_context
def validate(
    ctx: click.Context, original: Path, template: Path, generated: Path, as_json: bool
) -> None:
    """Grade GENERATED against ORIGINAL and TEMPLATE."""
    validator = build_validator(ctx.obj["settings"])
    result = asyncio.run(validator.validate(original, template, generated))

    if as_json:
        click.echo(json.dumps(_jsonable(asdict(result)), indent=2))
    else:
        echo_validation(result)

    if not result.is_valid:
        sys.exit(1)


@cli.command("validate-batch")
@click.argument("manifest", type=click.Path(exists=True, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON")
@click.pass_context
def validate_batch(ctx: click.Context, manifest: Path, as_json: bool) -> None:
    """Grade every entry of a YAML MANIFEST."""
    requests = load_manifest(manifest)
    validator = build_validator(ctx.obj["settings"])
    batch: BatchValidationResult = asyncio.run(validator.validate_batch(requests))

    if as_json:
        click.echo(json.dumps(_jsonable(asdict(batch)), indent=2))
        return

    for item in batch.results:
        mark = "✓" if item.result.is_valid else "✗"
        click.echo(
            f"{mark} {item.document_path.name} ({item.template_name}): "
            f"confidence={item.result.confidence_score:.2f} {item.result.summary}"
        )
    click.echo(
        f"\nValidated: {batch.total_documents} documents, {batch.valid_documents} valid, "
        f"{batch.invalid_documents} invalid, average confidence "
        f"{batch.average_confidence_score:.2f}"
    )


if __name__ == "__main__":
    cli()
