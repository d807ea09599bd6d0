"""
Similarity search over stored articles.

Two interchangeable indexes:
- JaccardIndex: word-set overlap with title/category boosts (no external calls)
- VectorIndex: cosine similarity between a query embedding and stored embeddings
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .database import Database, DBArticle
    from .summarizer import Summarizer

logger = logging.getLogger(__name__)

TITLE_BOOST = 0.3
CATEGORY_BOOST = 0.1


@dataclass
class SearchResult:
    """One ranked article."""
    article_id: str
    score: float
    title: str
    snippet: str
    category: str | None
    published_at: datetime

    @classmethod
    def from_article(cls, article: "DBArticle", score: float) -> "SearchResult":
        return cls(
            article_id=article.id,
            score=score,
            title=article.title,
            snippet=article.snippet,
            category=article.category,
            published_at=article.published_at,
        )


class SimilarityIndex(ABC):
    """Search capability shared by every index implementation."""

    name: str = "base"

    def __init__(self, db: "Database"):
        self.db = db

    @abstractmethod
    async def search(self, query: str, limit: int = 10) -> list[SearchResult]:
        """Rank non-archived articles against ``query``, best first."""
        pass

    async def find_similar(self, article: "DBArticle", limit: int = 5) -> list[SearchResult]:
        """Articles similar to ``article``, excluding the article itself."""
        results = await self.search(f"{article.title} {article.snippet}", limit + 1)
        return [r for r in results if r.article_id != article.id][:limit]


class JaccardIndex(SimilarityIndex):
    """
    Word-overlap ranking.

    Candidates are the ``3 * limit`` newest non-archived articles. The score
    is the Jaccard index of lowercase whitespace-split words of the query and
    of ``title snippet content``, plus fixed boosts when the whole query
    appears in the title or category, clamped to 1.0.
    """

    name = "jaccard"

    async def search(self, query: str, limit: int = 10) -> list[SearchResult]:
        query_lower = query.lower()
        query_words = set(query_lower.split())
        candidates, _ = self.db.get_articles(limit=limit * 3)

        results = []
        for article in candidates:
            text = f"{article.title} {article.snippet} {article.content}".lower()
            words = set(text.split())

            union = query_words | words
            score = len(query_words & words) / len(union) if union else 0.0

            if query_lower in article.title.lower():
                score += TITLE_BOOST
            if article.category and query_lower in article.category.lower():
                score += CATEGORY_BOOST

            score = min(score, 1.0)
            if score > 0:
                results.append(SearchResult.from_article(article, score))

        results.sort(key=lambda r: r.score, reverse=True)
        return results[:limit]


class VectorIndex(SimilarityIndex):
    """Cosine nearest-neighbour scan over stored article embeddings."""

    name = "vector"

    def __init__(self, db: "Database", summarizer: "Summarizer"):
        super().__init__(db)
        self.summarizer = summarizer

    async def search(self, query: str, limit: int = 10) -> list[SearchResult]:
        pairs = self.db.get_embedded_articles()
        if not pairs:
            return []

        query_vec = np.asarray(await self.summarizer.generate_embedding(query), dtype=np.float32)

        dims = {len(embedding.vector) for _, embedding in pairs}
        if len(dims) > 1 or query_vec.shape[0] not in dims:
            logger.warning("Stored embeddings do not match the query embedding size")
            pairs = [(a, e) for a, e in pairs if len(e.vector) == query_vec.shape[0]]
            if not pairs:
                return []

        matrix = np.asarray([embedding.vector for _, embedding in pairs], dtype=np.float32)
        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query_vec)
        norms[norms == 0] = 1.0
        scores = np.dot(matrix, query_vec) / norms

        ranked = np.argsort(-scores)[:limit]
        return [
            SearchResult.from_article(pairs[i][0], float(scores[i]))
            for i in ranked
            if scores[i] > 0
        ]


def create_index(
    backend: str,
    db: "Database",
    summarizer: "Summarizer | None" = None,
) -> SimilarityIndex:
    """
    Build the configured index.

    ``vector`` needs a summarizer with an embedding provider; without one the
    Jaccard index is used instead.
    """
    if backend.lower() == "vector":
        if summarizer is not None and summarizer.embedding_provider is not None:
            return VectorIndex(db, summarizer)
        logger.warning("Vector search requested but no embedding provider configured; using jaccard")
    return JaccardIndex(db)
