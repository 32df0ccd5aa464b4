"""Abstract LLM provider interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel


class GenerationConfig(BaseModel):
    """Sampling parameters sent alongside the prompt."""

    temperature: float = 0.1
    max_output_tokens: int = 2000
    response_mime_type: str | None = "application/json"


class LLMResponse(BaseModel):
    """Raw text returned by an LLM call, plus usage where the provider reports it."""

    content: str
    prompt_tokens: int = 0
    completion_tokens: int = 0
    model: str = ""


class LLMProvider(ABC):
    """Abstract base for LLM provider implementations.

    A provider sends exactly one request per :meth:`complete` call.  It does
    not retry, cache or rate limit; those are caller policy.
    """

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        *,
        credential: str,
        model: str,
        config: GenerationConfig | None = None,
    ) -> LLMResponse:
        """Send a single user-role prompt and return the model's text.

        Args:
            prompt: The full instruction message.
            credential: API key authorizing the call.
            model: Model identifier.
            config: Generation parameters; provider defaults when None.

        Returns:
            LLMResponse with the raw model text.

        Raises:
            TransportError: Endpoint unreachable or non-success status.
            EmptyResponseError: Success status but no usable text.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release any held resources."""
        ...
