"""
Embedding repository - article vectors stored as float32 blobs.
"""

from .connection import DatabaseConnection
from .converters import article_select, row_to_article, row_to_embedding, to_timestamp, utc_now, vector_to_blob
from .models import DBArticle, DBEmbedding


class EmbeddingRepository:
    """Repository for article embeddings."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def save(self, article_id: str, vector: list[float], model: str | None = None):
        """Insert or replace the embedding for an article."""
        with self._db.conn() as conn:
            conn.execute(
                """INSERT INTO article_embeddings (article_id, embedding, model, created_at)
                   VALUES (?, ?, ?, ?)
                   ON CONFLICT(article_id) DO UPDATE SET
                   embedding = excluded.embedding, model = excluded.model,
                   created_at = excluded.created_at""",
                (article_id, vector_to_blob(vector), model, to_timestamp(utc_now()))
            )

    def get(self, article_id: str) -> DBEmbedding | None:
        with self._db.conn() as conn:
            row = conn.execute(
                "SELECT * FROM article_embeddings WHERE article_id = ?", (article_id,)
            ).fetchone()
            return row_to_embedding(row) if row else None

    def exists(self, article_id: str) -> bool:
        with self._db.conn() as conn:
            row = conn.execute(
                "SELECT 1 FROM article_embeddings WHERE article_id = ?", (article_id,)
            ).fetchone()
            return row is not None

    def get_active_with_articles(self) -> list[tuple[DBArticle, DBEmbedding]]:
        """Embeddings of non-archived articles, paired with the article."""
        with self._db.conn() as conn:
            rows = conn.execute(
                f"""SELECT e.*, {article_select()}
                    FROM article_embeddings e
                    JOIN articles a ON a.id = e.article_id
                    WHERE a.is_archived = FALSE
                    ORDER BY a.published_at DESC"""
            ).fetchall()
            return [(row_to_article(row, prefix="a_"), row_to_embedding(row)) for row in rows]

    def get_articles_missing(self, limit: int) -> list[DBArticle]:
        """Newest non-archived articles that have no embedding yet."""
        with self._db.conn() as conn:
            rows = conn.execute(
                """SELECT a.* FROM articles a
                   LEFT JOIN article_embeddings e ON e.article_id = a.id
                   WHERE e.article_id IS NULL AND a.is_archived = FALSE
                   ORDER BY a.created_at DESC
                   LIMIT ?""",
                (limit,)
            ).fetchall()
            return [row_to_article(row) for row in rows]

    def counts(self) -> tuple[int, int]:
        """(non-archived articles, non-archived articles with an embedding)."""
        with self._db.conn() as conn:
            total = conn.execute(
                "SELECT COUNT(*) AS count FROM articles WHERE is_archived = FALSE"
            ).fetchone()["count"]
            embedded = conn.execute(
                """SELECT COUNT(*) AS count FROM article_embeddings e
                   JOIN articles a ON a.id = e.article_id
                   WHERE a.is_archived = FALSE"""
            ).fetchone()["count"]
            return total, embedded
