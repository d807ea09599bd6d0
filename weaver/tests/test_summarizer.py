"""
Tests for the Summarizer.

Uses the mock LLM provider to check prompt construction, settings handling
and error mapping without requiring API keys.
"""

import pytest

from weaver.exceptions import EmbeddingError, SummarizationError
from weaver.summarizer import FALLBACK_SYSTEM_PROMPT, Summarizer

from conftest import MockProvider


class BrokenSettingsDB:
    """Stand-in database whose settings reads always fail."""

    def get_setting(self, key, default=None):
        raise RuntimeError("database is locked")


class TestSummarizeText:
    """Tests for Summarizer.summarize_text."""

    @pytest.mark.asyncio
    async def test_uses_defaults_without_db(self):
        provider = MockProvider()
        provider.queue_response("  - Point one  ")
        summarizer = Summarizer(provider=provider)

        summary = await summarizer.summarize_text("Some article text.")

        assert summary == "- Point one"
        call = provider.calls[0]
        assert call["user_prompt"] == "Please summarize the following article:\n\nSome article text."
        assert call["max_tokens"] == 150
        assert call["temperature"] == 0.3
        assert "geopolitical analyst" in call["system_prompt"]

    @pytest.mark.asyncio
    async def test_reads_settings_every_call(self, test_db):
        provider = MockProvider()
        summarizer = Summarizer(provider=provider, db=test_db)

        await summarizer.summarize_text("First")
        test_db.set_settings({
            "ai_max_tokens": "400",
            "ai_temperature": "0.9",
            "ai_provider": "mock",
            "ai_model": "m-2",
        })
        await summarizer.summarize_text("Second")

        assert provider.calls[0]["max_tokens"] == 150
        assert provider.calls[1]["max_tokens"] == 400
        assert provider.calls[1]["temperature"] == 0.9
        assert provider.calls[1]["model"] == "m-2"

    @pytest.mark.asyncio
    async def test_model_for_other_provider_is_not_sent(self, test_db):
        provider = MockProvider()
        test_db.set_settings({"ai_provider": "anthropic", "ai_model": "claude-custom"})
        summarizer = Summarizer(provider=provider, db=test_db)

        await summarizer.summarize_text("Text")

        assert provider.calls[0]["model"] is None

    @pytest.mark.asyncio
    async def test_unparseable_settings_fall_back(self, test_db):
        provider = MockProvider()
        test_db.set_settings({"ai_max_tokens": "many", "ai_temperature": "warm"})
        summarizer = Summarizer(provider=provider, db=test_db)

        await summarizer.summarize_text("Text")

        assert provider.calls[0]["max_tokens"] == 150
        assert provider.calls[0]["temperature"] == 0.3

    @pytest.mark.asyncio
    async def test_settings_read_error_uses_fallback_prompt(self):
        provider = MockProvider()
        summarizer = Summarizer(provider=provider, db=BrokenSettingsDB())

        await summarizer.summarize_text("Text")

        assert provider.calls[0]["system_prompt"] == FALLBACK_SYSTEM_PROMPT

    @pytest.mark.asyncio
    async def test_input_is_truncated(self):
        provider = MockProvider()
        summarizer = Summarizer(provider=provider)
        text = "a" * 1799 + "." + "b" * 700

        await summarizer.summarize_text(text)

        prompt = provider.calls[0]["user_prompt"]
        body = prompt.split("\n\n", 1)[1]
        assert len(body) == 1800

    @pytest.mark.asyncio
    async def test_provider_error(self):
        summarizer = Summarizer(provider=MockProvider(fail=True))
        with pytest.raises(SummarizationError, match="Failed to generate AI summary"):
            await summarizer.summarize_text("Text")

    @pytest.mark.asyncio
    async def test_empty_response(self):
        provider = MockProvider()
        provider.queue_response("   ")
        summarizer = Summarizer(provider=provider)
        with pytest.raises(SummarizationError):
            await summarizer.summarize_text("Text")


class TestGenerateEmbedding:
    """Tests for Summarizer.generate_embedding."""

    @pytest.mark.asyncio
    async def test_returns_vector(self):
        provider = MockProvider()
        summarizer = Summarizer(provider=provider, embedding_provider=provider)

        vector = await summarizer.generate_embedding("abc")

        assert len(vector) == 26
        assert vector[0] == pytest.approx(1.1)

    @pytest.mark.asyncio
    async def test_input_truncated_to_1000(self):
        provider = MockProvider()
        summarizer = Summarizer(provider=provider, embedding_provider=provider)

        await summarizer.generate_embedding("word " * 400)

        assert len(provider.embed_calls[0]) <= 1000

    @pytest.mark.asyncio
    async def test_without_embedding_provider(self):
        summarizer = Summarizer(provider=MockProvider())
        with pytest.raises(EmbeddingError):
            await summarizer.generate_embedding("Text")

    @pytest.mark.asyncio
    async def test_provider_error(self):
        provider = MockProvider(fail=True)
        summarizer = Summarizer(provider=provider, embedding_provider=provider)
        with pytest.raises(EmbeddingError, match="Failed to generate embedding"):
            await summarizer.generate_embedding("Text")


class TestConnection:
    """Tests for Summarizer.test_connection."""

    @pytest.mark.asyncio
    async def test_long_summary_is_previewed(self):
        provider = MockProvider()
        provider.queue_response("x" * 150)
        result = await Summarizer(provider=provider).test_connection()
        assert result["success"] is True
        assert result["message"].endswith('x..."')

    @pytest.mark.asyncio
    async def test_failure_message(self):
        result = await Summarizer(provider=MockProvider(fail=True)).test_connection()
        assert result == {
            "success": False,
            "message": "AI connection failed: provider unavailable",
        }
