"""Template reconciliation - fill a template from document content."""

import logging
from dataclasses import dataclass, field

from ..ports.llm import CompletionPort, SamplingParams
from .errors import NormalizationError
from .placeholders import escape_placeholders, extract_placeholders, find_surviving_markers
from .prompts import build_normalize_prompt

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationResult:
    text: str
    placeholders: list[str] = field(default_factory=list)
    surviving: list[str] = field(default_factory=list)

    @property
    def warnings(self) -> list[str]:
        return [f"Placeholder {{{{{name}}}}} was not replaced" for name in self.surviving]


class TemplateReconciler:
    """Reorganizes document content into a template via the completion service."""

    def __init__(
        self,
        completion: CompletionPort,
        params: SamplingParams | None = None,
        strict: bool = False,
    ) -> None:
        self.completion = completion
        self.params = params or SamplingParams(temperature=0.3, max_tokens=4000)
        self.strict = strict

    async def reconcile(self, content: str, template: str) -> ReconciliationResult:
        """Fill template from content.

        Surviving placeholders are reported as warnings, or raised as
        NormalizationError when the reconciler is strict.
        """
        placeholders = extract_placeholders(template)
        prompt = build_normalize_prompt(escape_placeholders(template), content)
        logger.debug(
            f"Reconciling {len(content)} chars into template with "
            f"{len(placeholders)} placeholders"
        )

        try:
            output = await self.completion.complete(prompt, self.params)
        except Exception as e:
            logger.error(f"Completion service failed: {e}")
            raise NormalizationError(str(e)) from e

        if not output or not output.strip():
            raise NormalizationError("completion service returned empty output")

        surviving = find_surviving_markers(output, placeholders)
        result = ReconciliationResult(
            text=output, placeholders=placeholders, surviving=surviving
        )
        if surviving:
            logger.warning(f"Unreplaced placeholders in output: {', '.join(surviving)}")
            if self.strict:
                raise NormalizationError(
                    f"placeholders not replaced: {', '.join(surviving)}"
                )

        return result
