"""
Provider factory for creating LLM provider instances.

Handles provider selection based on configuration and available API keys.
"""

from enum import Enum

from .base import LLMProvider
from .anthropic import AnthropicProvider
from .openai import OpenAIProvider
from .google import GoogleProvider


class ProviderType(Enum):
    """Available LLM provider types."""
    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GOOGLE = "google"


# Providers with an embeddings API, in order of preference
EMBEDDING_PROVIDERS = (ProviderType.OPENAI, ProviderType.GOOGLE)


def create_provider(
    provider_type: ProviderType | str,
    api_key: str,
    default_model: str | None = None,
    embedding_model: str | None = None,
    **kwargs,
) -> LLMProvider:
    """
    Create an LLM provider instance.

    Args:
        provider_type: The provider to create (anthropic, openai, google)
        api_key: API key for the provider
        default_model: Optional default model override
        embedding_model: Optional embedding model override (ignored by Anthropic)
        **kwargs: Additional provider-specific arguments

    Returns:
        Configured LLMProvider instance

    Raises:
        ValueError: If provider_type is unknown
    """
    if isinstance(provider_type, str):
        try:
            provider_type = ProviderType(provider_type.lower())
        except ValueError:
            raise ValueError(
                f"Unknown provider: {provider_type}. "
                f"Available: {[p.value for p in ProviderType]}"
            )

    if provider_type == ProviderType.ANTHROPIC:
        return AnthropicProvider(
            api_key=api_key,
            default_model=default_model or "claude-haiku-4-5-20251001",
        )
    elif provider_type == ProviderType.OPENAI:
        return OpenAIProvider(
            api_key=api_key,
            default_model=default_model or "gpt-4o-mini",
            embedding_model=embedding_model,
            organization=kwargs.get("organization"),
        )
    elif provider_type == ProviderType.GOOGLE:
        return GoogleProvider(
            api_key=api_key,
            default_model=default_model or "gemini-2.5-flash",
            embedding_model=embedding_model,
        )
    else:
        raise ValueError(f"Unknown provider type: {provider_type}")


def get_provider_from_env(
    anthropic_key: str | None = None,
    openai_key: str | None = None,
    google_key: str | None = None,
    preferred_provider: str | None = None,
    default_model: str | None = None,
) -> LLMProvider | None:
    """
    Create a completion provider from available keys.

    Uses ``preferred_provider`` when it names a provider with a key,
    otherwise the first provider with a key in the order
    Anthropic > OpenAI > Google.

    Returns:
        Configured LLMProvider or None if no keys available
    """
    providers = {
        ProviderType.ANTHROPIC: anthropic_key,
        ProviderType.OPENAI: openai_key,
        ProviderType.GOOGLE: google_key,
    }

    if preferred_provider:
        try:
            pref_type = ProviderType(preferred_provider.lower())
            if providers.get(pref_type):
                return create_provider(
                    pref_type,
                    providers[pref_type],
                    default_model=default_model,
                )
        except ValueError:
            pass  # Invalid provider name, fall through to default order

    # A model picked for the preferred provider does not carry over to a fallback
    fallback_model = None if preferred_provider else default_model
    for provider_type, api_key in providers.items():
        if api_key:
            return create_provider(
                provider_type,
                api_key,
                default_model=fallback_model,
            )

    return None


def get_embedding_provider_from_env(
    openai_key: str | None = None,
    google_key: str | None = None,
    preferred_provider: str | None = None,
    embedding_model: str | None = None,
) -> LLMProvider | None:
    """
    Create a provider able to embed text, or None if no such key is set.

    The preferred provider wins when it supports embeddings; otherwise
    OpenAI > Google.
    """
    providers = {
        ProviderType.OPENAI: openai_key,
        ProviderType.GOOGLE: google_key,
    }

    order = list(EMBEDDING_PROVIDERS)
    if preferred_provider:
        try:
            pref_type = ProviderType(preferred_provider.lower())
            if pref_type in order:
                order.remove(pref_type)
                order.insert(0, pref_type)
        except ValueError:
            pass

    for provider_type in order:
        api_key = providers.get(provider_type)
        if api_key:
            return create_provider(provider_type, api_key, embedding_model=embedding_model)

    return None
