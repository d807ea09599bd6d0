"""
Article service: listing, edits, summaries, embeddings and similarity search.
"""

import logging
from typing import TYPE_CHECKING

from ..database import Database
from ..database.models import DBArticle
from ..embeddings import BatchResult, EmbeddingService
from ..exceptions import APIError, EmbeddingError, SummarizationError, require_article
from ..search import JaccardIndex, SearchResult

if TYPE_CHECKING:
    from ..search import SimilarityIndex
    from ..summarizer import Summarizer

logger = logging.getLogger(__name__)


def _ai_unavailable() -> APIError:
    return APIError(
        503,
        "AI unavailable",
        "No LLM provider configured. Set ANTHROPIC_API_KEY, OPENAI_API_KEY, or GOOGLE_API_KEY.",
    )


class ArticleService:
    """Service for article-related business logic."""

    def __init__(
        self,
        db: Database,
        summarizer: "Summarizer | None" = None,
        search_index: "SimilarityIndex | None" = None,
    ):
        self.db = db
        self.summarizer = summarizer
        self.search_index = search_index or JaccardIndex(db)
        self.embeddings = EmbeddingService(db, summarizer)

    # ─────────────────────────────────────────────────────────────
    # Article Management
    # ─────────────────────────────────────────────────────────────

    def list_articles(
        self,
        category: str | None = None,
        status: str | None = None,
        feed_id: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[list[DBArticle], int]:
        """Non-archived articles newest first, with the unpaged total."""
        return self.db.get_articles(
            category=category,
            status=status,
            feed_id=feed_id,
            limit=limit,
            offset=offset,
        )

    def get_article(self, article_id: str) -> DBArticle:
        return require_article(self.db.get_article(article_id))

    def update_article(self, article_id: str, fields: dict) -> DBArticle:
        """Patch read/archived flags, summary or analysis. Omitted keys are untouched."""
        require_article(self.db.get_article(article_id))
        for flag in ("is_read", "is_archived"):
            if flag in fields and fields[flag] is None:
                del fields[flag]
        return require_article(self.db.update_article(article_id, fields))

    # ─────────────────────────────────────────────────────────────
    # AI
    # ─────────────────────────────────────────────────────────────

    async def summarize(self, article_id: str) -> tuple[str, bool]:
        """
        Return the article summary, generating and storing it if missing.

        Returns:
            (summary, cached)
        """
        article = require_article(self.db.get_article(article_id))
        if article.summary:
            return article.summary, True

        if not self.summarizer:
            raise _ai_unavailable()

        try:
            summary = await self.summarizer.summarize_text(article.content or article.title)
        except SummarizationError as e:
            logger.error(f"Summarization failed for article {article_id}: {e}")
            raise APIError(500, "Failed to generate summary", str(e))

        self.db.update_article(article_id, {"summary": summary})
        return summary, False

    async def generate_embedding(self, article_id: str) -> bool:
        """
        Ensure the article has an embedding.

        Returns:
            True if it already existed
        """
        article = require_article(self.db.get_article(article_id))
        if self.db.has_embedding(article_id):
            return True
        if not self.summarizer or not self.summarizer.embedding_provider:
            raise _ai_unavailable()
        try:
            return await self.embeddings.ensure_embedding(article)
        except EmbeddingError as e:
            logger.error(f"Embedding failed for article {article_id}: {e}")
            raise APIError(500, "Failed to generate embedding", str(e))

    async def batch_embeddings(self, limit: int = 50) -> BatchResult:
        if not self.summarizer or not self.summarizer.embedding_provider:
            raise _ai_unavailable()
        return await self.embeddings.batch_generate(limit)

    def embedding_stats(self) -> dict:
        return self.embeddings.stats()

    # ─────────────────────────────────────────────────────────────
    # Search
    # ─────────────────────────────────────────────────────────────

    async def search(self, query: str | None, limit: int = 10) -> list[SearchResult]:
        if not query or not query.strip():
            raise APIError(400, "Missing query", "Query text is required")
        try:
            return await self.search_index.search(query, limit)
        except EmbeddingError as e:
            raise APIError(500, "Search failed", str(e))

    async def find_similar(self, article_id: str, limit: int = 5) -> list[SearchResult]:
        article = require_article(self.db.get_article(article_id))
        try:
            return await self.search_index.find_similar(article, limit)
        except EmbeddingError as e:
            raise APIError(500, "Failed to find similar articles", str(e))
