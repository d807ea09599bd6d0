"""
Base LLM provider interface.

Defines the abstract interface that all provider implementations must follow.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from ..exceptions import EmbeddingError


@dataclass
class ProviderCapabilities:
    """Describes what features a provider supports."""
    supports_system_prompt: bool = True
    supports_embeddings: bool = False
    max_context_tokens: int = 128000


@dataclass
class LLMResponse:
    """Standardized response from any LLM provider."""
    text: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    metadata: dict = field(default_factory=dict)


class LLMProvider(ABC):
    """
    Abstract base class for LLM providers.

    All provider implementations must inherit from this class and implement
    the required methods. Embedding support is optional and advertised via
    ``capabilities.supports_embeddings``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider name (e.g., 'anthropic', 'openai', 'google')."""
        pass

    @property
    @abstractmethod
    def capabilities(self) -> ProviderCapabilities:
        """Return the provider's capabilities."""
        pass

    @property
    def default_model(self) -> str | None:
        return getattr(self, "_default_model", None)

    @abstractmethod
    def complete(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.0,
    ) -> LLMResponse:
        """
        Generate a completion from the model.

        Args:
            user_prompt: The user message/prompt
            system_prompt: Optional system prompt for context
            model: Specific model to use (defaults to provider's default)
            max_tokens: Maximum tokens in response
            temperature: Sampling temperature (0.0 = deterministic)

        Returns:
            LLMResponse with the generated text and metadata
        """
        pass

    def embed(self, text: str, model: str | None = None) -> list[float]:
        """
        Compute an embedding vector for ``text``.

        Only called on providers whose capabilities report
        ``supports_embeddings``; the rest keep this default.

        Raises:
            EmbeddingError: Always, for providers without an embeddings API
        """
        raise EmbeddingError(f"{self.name} provider does not support embeddings")

    async def complete_async(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.0,
    ) -> LLMResponse:
        """
        Async version of complete.

        Default implementation wraps sync call in executor.
        Providers with native async support should override this.
        """
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(
            None,
            lambda: self.complete(
                user_prompt=user_prompt,
                system_prompt=system_prompt,
                model=model,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        )

    async def embed_async(self, text: str, model: str | None = None) -> list[float]:
        """Async version of embed, run in the default executor."""
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, lambda: self.embed(text, model=model))
