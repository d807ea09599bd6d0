"""
Embedding management - generate, store and report on article vectors.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .database import Database, DBArticle
    from .summarizer import Summarizer

logger = logging.getLogger(__name__)

BATCH_SIZE = 5


@dataclass
class BatchResult:
    processed: int
    errors: int


class EmbeddingService:
    """Computes embeddings for articles through the summarizer and stores them."""

    def __init__(self, db: "Database", summarizer: "Summarizer | None" = None):
        self.db = db
        self.summarizer = summarizer

    async def store_article_embedding(self, article: "DBArticle"):
        """Embed the article's content and store the vector (replacing any old one)."""
        vector = await self.summarizer.generate_embedding(article.content or article.title)
        self.db.save_embedding(article.id, vector, self.summarizer.embedding_model_name)

    async def ensure_embedding(self, article: "DBArticle") -> bool:
        """
        Make sure an embedding exists.

        Returns:
            True if one was already stored, False if it was generated now
        """
        if self.db.has_embedding(article.id):
            return True
        await self.store_article_embedding(article)
        return False

    async def batch_generate(self, limit: int = 50) -> BatchResult:
        """Embed up to ``limit`` newest articles that have none, BATCH_SIZE at a time."""
        articles = self.db.get_articles_without_embeddings(limit)
        processed = 0
        errors = 0

        for start in range(0, len(articles), BATCH_SIZE):
            batch = articles[start:start + BATCH_SIZE]
            results = await asyncio.gather(
                *(self.store_article_embedding(article) for article in batch),
                return_exceptions=True
            )
            for article, result in zip(batch, results):
                if isinstance(result, BaseException):
                    logger.error(f"Failed to embed article {article.id}: {result}")
                    errors += 1
                else:
                    processed += 1

        logger.info(f"Embedding batch finished: {processed} processed, {errors} errors")
        return BatchResult(processed=processed, errors=errors)

    def stats(self) -> dict:
        """Coverage of embeddings over non-archived articles, as a percentage."""
        total, embedded = self.db.embedding_counts()
        coverage = (embedded / total) * 100 if total > 0 else 0.0
        return {
            "total_articles": total,
            "articles_with_embeddings": embedded,
            "coverage": round(coverage, 2),
        }
