"""Completion adapter using Claude API."""

import logging

from ...ports.llm import CompletionPort, SamplingParams

logger = logging.getLogger(__name__)


class ClaudeAPIAdapter(CompletionPort):
    """Completion implementation using Claude API (pay-as-you-go)."""

    def __init__(self, model: str = "claude-sonnet-4-20250514") -> None:
        import anthropic

        self.client = anthropic.AsyncAnthropic()
        self.model = model

    async def complete(self, prompt: str, params: SamplingParams) -> str:
        logger.info("Requesting completion from Claude API")

        response = await self.client.messages.create(
            model=self.model,
            max_tokens=params.max_tokens,
            temperature=params.temperature,
            messages=[{"role": "user", "content": prompt}],
        )

        return "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )
