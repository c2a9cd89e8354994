"""Unit tests for template reconciliation."""

import asyncio
import re
from unittest.mock import MagicMock

import pytest

from docnorm.domain.errors import NormalizationError
from docnorm.domain.reconciler import TemplateReconciler
from docnorm.ports.llm import CompletionPort, SamplingParams

from ..conftest import INVOICE_FILLED, INVOICE_TEMPLATE, INVOICE_TEXT


def filling_completion() -> MagicMock:
    """Completion stub that fills every [[marker]] of the embedded template."""

    async def complete(prompt: str, params: SamplingParams) -> str:
        template = prompt.split("<<<TEMPLATE_BEGIN>>>\n", 1)[1].split("\n<<<TEMPLATE_END>>>", 1)[0]
        return re.sub(r"\[\[(\w+)\]\]", lambda m: f"value-of-{m.group(1)}", template)

    mock = MagicMock(spec=CompletionPort)
    mock.complete.side_effect = complete
    return mock


class TestTemplateReconciler:
    """Tests for TemplateReconciler."""

    def test_invoice_scenario(self, mock_completion: MagicMock) -> None:
        reconciler = TemplateReconciler(mock_completion)
        result = asyncio.run(reconciler.reconcile(INVOICE_TEXT, INVOICE_TEMPLATE))

        assert result.text == INVOICE_FILLED
        assert result.placeholders == ["amount", "party"]
        assert result.surviving == []
        assert result.warnings == []

    def test_prompt_is_escaped(self, mock_completion: MagicMock) -> None:
        reconciler = TemplateReconciler(mock_completion)
        asyncio.run(reconciler.reconcile(INVOICE_TEXT, INVOICE_TEMPLATE))

        prompt, params = mock_completion.complete.call_args.args
        assert "Amount: [[amount]]" in prompt
        assert "{{amount}}" not in prompt
        assert INVOICE_TEXT in prompt
        assert params == SamplingParams(temperature=0.3, max_tokens=4000)

    def test_custom_params_forwarded(self, mock_completion: MagicMock) -> None:
        params = SamplingParams(temperature=0.1, max_tokens=500)
        reconciler = TemplateReconciler(mock_completion, params=params)
        asyncio.run(reconciler.reconcile(INVOICE_TEXT, INVOICE_TEMPLATE))
        assert mock_completion.complete.call_args.args[1] is params

    @pytest.mark.parametrize("count", [1, 3, 8])
    def test_deterministic_fill_leaves_no_markers(self, count: int) -> None:
        template = "\n".join(f"Field {i}: {{{{field_{i}}}}}" for i in range(count))
        reconciler = TemplateReconciler(filling_completion())
        result = asyncio.run(reconciler.reconcile("source text", template))

        assert len(result.placeholders) == count
        assert result.surviving == []
        assert "value-of-field_0" in result.text

    def test_surviving_markers_are_warnings(self, mock_completion: MagicMock) -> None:
        mock_completion.complete.return_value = "Amount: $500\nParty: [[party]]"
        reconciler = TemplateReconciler(mock_completion)
        result = asyncio.run(reconciler.reconcile(INVOICE_TEXT, INVOICE_TEMPLATE))

        assert result.surviving == ["party"]
        assert result.warnings == ["Placeholder {{party}} was not replaced"]

    def test_surviving_markers_fail_when_strict(self, mock_completion: MagicMock) -> None:
        mock_completion.complete.return_value = "Amount: {{amount}}\nParty: Sir"
        reconciler = TemplateReconciler(mock_completion, strict=True)
        with pytest.raises(NormalizationError, match="amount"):
            asyncio.run(reconciler.reconcile(INVOICE_TEXT, INVOICE_TEMPLATE))

    @pytest.mark.parametrize("output", ["", "   \n", None])
    def test_empty_output_fails(self, mock_completion: MagicMock, output: str | None) -> None:
        mock_completion.complete.return_value = output
        reconciler = TemplateReconciler(mock_completion)
        with pytest.raises(NormalizationError, match="empty"):
            asyncio.run(reconciler.reconcile(INVOICE_TEXT, INVOICE_TEMPLATE))

    def test_completion_error_wrapped(self, mock_completion: MagicMock) -> None:
        mock_completion.complete.side_effect = ConnectionError("quota exceeded")
        reconciler = TemplateReconciler(mock_completion)
        with pytest.raises(NormalizationError, match="quota exceeded") as exc_info:
            asyncio.run(reconciler.reconcile(INVOICE_TEXT, INVOICE_TEMPLATE))
        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert exc_info.value.code == "NORMALIZATION_ERROR"
