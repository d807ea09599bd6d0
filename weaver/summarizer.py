"""
Summarizer - LLM-powered article summarization and embeddings.

Features:
- Multi-provider support (Anthropic, OpenAI, Google)
- Prompt, token budget and temperature read from settings on every call
- Boundary-aware input truncation
- Embedding generation through a separate, embedding-capable provider
"""

import logging
from typing import TYPE_CHECKING

from .database.models import DEFAULT_SETTINGS
from .exceptions import EmbeddingError, SummarizationError
from .text import truncate_at_boundary

if TYPE_CHECKING:
    from .database import Database
    from .providers import LLMProvider

logger = logging.getLogger(__name__)

# Used when the settings store cannot be read at all
FALLBACK_SYSTEM_PROMPT = "Please provide a concise, factual summary of the following text."

TEST_TEXT = "This is a test message to verify AI functionality."


class Summarizer:
    """Summarizes article text and computes embeddings."""

    MAX_SUMMARY_INPUT = 2000
    MAX_EMBEDDING_INPUT = 1000

    def __init__(
        self,
        provider: "LLMProvider",
        db: "Database | None" = None,
        embedding_provider: "LLMProvider | None" = None,
        embedding_model: str | None = None,
    ):
        self.provider = provider
        self.db = db
        self.embedding_provider = embedding_provider
        self.embedding_model = embedding_model

    # ─────────────────────────────────────────────────────────────
    # Settings
    # ─────────────────────────────────────────────────────────────

    def _setting(self, key: str) -> str | None:
        if self.db is None:
            return None
        return self.db.get_setting(key)

    def _system_prompt(self) -> str:
        try:
            return self._setting("ai_system_prompt") or DEFAULT_SETTINGS["ai_system_prompt"]
        except Exception as e:
            logger.error(f"Failed to read system prompt from settings: {e}")
            return FALLBACK_SYSTEM_PROMPT

    def _max_tokens(self) -> int:
        try:
            return int(self._setting("ai_max_tokens") or DEFAULT_SETTINGS["ai_max_tokens"])
        except Exception as e:
            logger.error(f"Failed to read max tokens from settings: {e}")
            return int(DEFAULT_SETTINGS["ai_max_tokens"])

    def _temperature(self) -> float:
        try:
            return float(self._setting("ai_temperature") or DEFAULT_SETTINGS["ai_temperature"])
        except Exception as e:
            logger.error(f"Failed to read temperature from settings: {e}")
            return float(DEFAULT_SETTINGS["ai_temperature"])

    def _model(self) -> str | None:
        """Stored model override, only when it was chosen for this provider."""
        try:
            model = self._setting("ai_model")
            preferred = self._setting("ai_provider")
        except Exception:
            return None
        if not model:
            return None
        if preferred and preferred.lower() != self.provider.name:
            return None
        return model

    # ─────────────────────────────────────────────────────────────
    # Operations
    # ─────────────────────────────────────────────────────────────

    async def summarize_text(self, text: str) -> str:
        """
        Summarize text with the configured provider.

        Raises:
            SummarizationError: If the provider fails or returns nothing
        """
        truncated = truncate_at_boundary(text, self.MAX_SUMMARY_INPUT)

        try:
            response = await self.provider.complete_async(
                user_prompt=f"Please summarize the following article:\n\n{truncated}",
                system_prompt=self._system_prompt(),
                model=self._model(),
                max_tokens=self._max_tokens(),
                temperature=self._temperature(),
            )
        except Exception as e:
            logger.error(f"AI summarization failed: {e}")
            raise SummarizationError("Failed to generate AI summary") from e

        summary = (response.text or "").strip() if response else ""
        if not summary:
            logger.error("AI summarization returned an empty response")
            raise SummarizationError("Failed to generate AI summary")
        return summary

    async def generate_embedding(self, text: str) -> list[float]:
        """
        Embed text with the embedding provider.

        Raises:
            EmbeddingError: If no embedding provider is configured or the call fails
        """
        if self.embedding_provider is None:
            raise EmbeddingError("Failed to generate embedding")

        truncated = truncate_at_boundary(text, self.MAX_EMBEDDING_INPUT)
        try:
            vector = await self.embedding_provider.embed_async(truncated, model=self.embedding_model)
        except Exception as e:
            logger.error(f"AI embedding generation failed: {e}")
            raise EmbeddingError("Failed to generate embedding") from e

        if not vector:
            logger.error("AI embedding generation returned no vector")
            raise EmbeddingError("Failed to generate embedding")
        return [float(v) for v in vector]

    @property
    def embedding_model_name(self) -> str | None:
        if self.embedding_model:
            return self.embedding_model
        if self.embedding_provider is None:
            return None
        return getattr(self.embedding_provider, "_embedding_model", None)

    async def test_connection(self) -> dict:
        """Round-trip a fixed sentence through the summarizer."""
        try:
            summary = await self.summarize_text(TEST_TEXT)
            preview = summary[:100] + ("..." if len(summary) > 100 else "")
            return {
                "success": True,
                "message": f'AI connection successful. Test summary: "{preview}"',
            }
        except Exception as e:
            cause = e.__cause__ or e
            return {
                "success": False,
                "message": f"AI connection failed: {cause}",
            }
