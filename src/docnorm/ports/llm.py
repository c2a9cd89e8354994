"""Completion port - interface for the text-generation service."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class SamplingParams:
    """Bounded generation parameters."""

    temperature: float = 0.3
    max_tokens: int = 4000


class CompletionPort(ABC):
    """Interface for a black-box text completion service."""

    @abstractmethod
    async def complete(self, prompt: str, params: SamplingParams) -> str:
        """Return the completion for prompt.

        Raises on auth, quota or network errors. No retries are expected here.
        """
        pass
