"""
OpenAI provider implementation.

Chat completions for summaries and the embeddings endpoint for similarity search.
"""

from openai import OpenAI

from .base import LLMProvider, LLMResponse, ProviderCapabilities


class OpenAIProvider(LLMProvider):
    """OpenAI GPT provider with embedding support."""

    DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"

    def __init__(
        self,
        api_key: str,
        default_model: str = "gpt-4o-mini",
        embedding_model: str | None = None,
        organization: str | None = None,
    ):
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            default_model: Default chat model
            embedding_model: Embedding model (defaults to text-embedding-3-small)
            organization: Optional organization ID
        """
        self.client = OpenAI(api_key=api_key, organization=organization)
        self._default_model = default_model
        self._embedding_model = embedding_model or self.DEFAULT_EMBEDDING_MODEL

    @property
    def name(self) -> str:
        return "openai"

    @property
    def capabilities(self) -> ProviderCapabilities:
        return ProviderCapabilities(
            supports_system_prompt=True,
            supports_embeddings=True,
            max_context_tokens=128000,
        )

    def complete(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.0,
    ) -> LLMResponse:
        """Generate a completion using GPT."""
        resolved_model = model or self._default_model

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})

        response = self.client.chat.completions.create(
            model=resolved_model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
        )

        choice = response.choices[0]
        usage = response.usage

        return LLMResponse(
            text=choice.message.content or "",
            model=resolved_model,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            metadata={
                "finish_reason": choice.finish_reason,
                "provider": "openai",
            }
        )

    def embed(self, text: str, model: str | None = None) -> list[float]:
        """Embed text with the OpenAI embeddings endpoint."""
        response = self.client.embeddings.create(
            model=model or self._embedding_model,
            input=text,
        )
        return list(response.data[0].embedding)
