"""Completion adapter using Ollama."""

import logging
from urllib.parse import urlparse

import httpx

from ...ports.llm import CompletionPort, SamplingParams

logger = logging.getLogger(__name__)


class OllamaAdapter(CompletionPort):
    """Completion implementation using a local Ollama server."""

    def __init__(
        self,
        model: str = "gemma3:4b",
        base_url: str = "http://localhost:11434",
        timeout: float = 120.0,
    ) -> None:
        parsed = urlparse(base_url)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"Invalid ollama_url scheme: {parsed.scheme}")
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def complete(self, prompt: str, params: SamplingParams) -> str:
        logger.info(f"Requesting completion from Ollama ({self.model})")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                f"{self.base_url}/api/chat",
                json={
                    "model": self.model,
                    "messages": [{"role": "user", "content": prompt}],
                    "stream": False,
                    "options": {
                        "temperature": params.temperature,
                        "num_predict": params.max_tokens,
                    },
                },
            )
            response.raise_for_status()

        return response.json()["message"]["content"]
