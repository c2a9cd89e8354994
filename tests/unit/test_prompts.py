"""Unit tests for prompt construction and response cleanup."""

import pytest

from docnorm.domain.prompts import (
    DOC_BEGIN,
    DOC_END,
    MISSING_VALUE,
    build_grading_prompt,
    build_normalize_prompt,
    strip_code_fence,
)


class TestNormalizePrompt:
    """Tests for build_normalize_prompt."""

    def test_embeds_template_and_content_verbatim(self) -> None:
        prompt = build_normalize_prompt("Amount: [[amount]]", "Dear Sir, {payment} due $500")
        assert "Amount: [[amount]]" in prompt
        assert f"{DOC_BEGIN}\nDear Sir, {{payment}} due $500\n{DOC_END}" in prompt

    def test_lists_rules(self) -> None:
        prompt = build_normalize_prompt("T", "C")
        assert MISSING_VALUE in prompt
        assert "same order" in prompt
        assert "professional" in prompt
        assert "ONLY the filled document" in prompt

    def test_contains_no_template_syntax(self) -> None:
        prompt = build_normalize_prompt("[[a]]", "content")
        assert "{{" not in prompt
        assert "}}" not in prompt


class TestGradingPrompt:
    """Tests for build_grading_prompt."""

    def test_embeds_all_three_texts(self) -> None:
        prompt = build_grading_prompt("ORIGINAL TEXT", "TEMPLATE [[x]]", "GENERATED TEXT")
        assert "ORIGINAL TEXT" in prompt
        assert "TEMPLATE [[x]]" in prompt
        assert "GENERATED TEXT" in prompt

    def test_describes_schema(self) -> None:
        prompt = build_grading_prompt("o", "t", "g")
        for key in ("isValid", "confidenceScore", "summary", "issues", "extractedFields", "recommendation"):
            assert f'"{key}"' in prompt
        assert '"severity": "Low|Medium|High"' in prompt
        assert prompt.count("{") == prompt.count("}")


class TestStripCodeFence:
    """Tests for strip_code_fence."""

    def test_json_fence(self) -> None:
        assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self) -> None:
        assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_fence_with_surrounding_text(self) -> None:
        raw = 'Here you go:\n```JSON\n{"a": 1}\n```\nThanks'
        assert strip_code_fence(raw) == '{"a": 1}'

    def test_single_line_fence(self) -> None:
        assert strip_code_fence('```{"a": 1}```') == '{"a": 1}'

    @pytest.mark.parametrize("text", ['```json {"a": 1}```', '```JSON\t{"a": 1}```'])
    def test_single_line_fence_with_tag(self, text: str) -> None:
        assert strip_code_fence(text) == '{"a": 1}'

    def test_single_line_list_with_tag(self) -> None:
        assert strip_code_fence("```json [1, 2]```") == "[1, 2]"

    def test_no_fence(self) -> None:
        assert strip_code_fence('  {"a": 1}  ') == '{"a": 1}'
