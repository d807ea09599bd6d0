"""
Anthropic Claude provider implementation.

Completion only; Anthropic has no embeddings endpoint.
"""

import anthropic

from .base import LLMProvider, LLMResponse, ProviderCapabilities


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider."""

    def __init__(
        self,
        api_key: str,
        default_model: str = "claude-haiku-4-5-20251001",
    ):
        """
        Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key
            default_model: Default model to use
        """
        self.client = anthropic.Anthropic(api_key=api_key)
        self._default_model = default_model

    @property
    def name(self) -> str:
        return "anthropic"

    @property
    def capabilities(self) -> ProviderCapabilities:
        return ProviderCapabilities(
            supports_system_prompt=True,
            supports_embeddings=False,
            max_context_tokens=200000,
        )

    def complete(
        self,
        user_prompt: str,
        system_prompt: str | None = None,
        model: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.0,
    ) -> LLMResponse:
        """Generate a completion using Claude."""
        resolved_model = model or self._default_model

        kwargs = {
            "model": resolved_model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": user_prompt}],
        }
        if temperature > 0:
            kwargs["temperature"] = temperature
        if system_prompt:
            kwargs["system"] = system_prompt

        response = self.client.messages.create(**kwargs)

        text = "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )
        usage = response.usage

        return LLMResponse(
            text=text,
            model=resolved_model,
            input_tokens=usage.input_tokens if usage else 0,
            output_tokens=usage.output_tokens if usage else 0,
            metadata={
                "stop_reason": response.stop_reason,
                "provider": "anthropic",
            }
        )
