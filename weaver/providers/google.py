"""
Google Gemini provider implementation.

Uses the google-genai SDK for both generation and embeddings.
"""

from google import genai
from google.genai import types

from .base import LLMProvider, LLMResponse, ProviderCapabilities


class GoogleProvider(LLMProvider):
    """Google Gemini provider with embedding support."""

    DEFAULT_EMBEDDING_MODEL = "gemini-embedding-001"

    def __init__(
        self,
        api_key: str,
        default_model: str = "gemini-2.5-flash",
        embedding_model: str | None = None,
    ):
        """
        Initialize Google Gemini provider.

        Args:
            api_key: Google AI API key
            default_model: Default generation model
            embedding_model: Embedding model (defaults to gemini-embedding-001)
        """
        self.client = genai.Client(api_key=api_key)
        self._default_model = default_model
        self._embedding_model = embedding_model or self.DEFAULT_EMBEDDING_MODEL

    @property
    def name(self) -> str:
        return "google"

    @property
    def capabilities(self) -> ProviderCapabilities:
        return ProviderCapabilities(
            supports_system_prompt=True,
            supports_embeddings=True,
            max_context_tokens=1000000,  # Gemini has very large context
        )

    def complete(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.0,
    ) -> LLMResponse:
        """Generate a completion using Gemini."""
        resolved_model = model or self._default_model

        config_kwargs = {
            "max_output_tokens": max_tokens,
            "temperature": temperature,
        }
        if system_prompt:
            config_kwargs["system_instruction"] = system_prompt

        response = self.client.models.generate_content(
            model=resolved_model,
            contents=user_prompt,
            config=types.GenerateContentConfig(**config_kwargs),
        )

        input_tokens = 0
        output_tokens = 0
        if getattr(response, "usage_metadata", None):
            input_tokens = response.usage_metadata.prompt_token_count or 0
            output_tokens = response.usage_metadata.candidates_token_count or 0

        return LLMResponse(
            text=response.text or "",
            model=resolved_model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            metadata={
                "provider": "google",
            }
        )

    def embed(self, text: str, model: str | None = None) -> list[float]:
        """Embed text with the Gemini embeddings endpoint."""
        response = self.client.models.embed_content(
            model=model or self._embedding_model,
            contents=text,
        )
        if not response.embeddings:
            return []
        return list(response.embeddings[0].values or [])
