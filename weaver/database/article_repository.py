"""
Article repository - CRUD operations for articles.
"""

import sqlite3
import uuid
from datetime import datetime

from .connection import DatabaseConnection
from .converters import row_to_article, to_timestamp, utc_now
from .models import DBArticle


class ArticleRepository:
    """Repository for article operations."""

    UPDATABLE = ("is_read", "is_archived", "summary", "analysis")

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def add(
        self,
        feed_id: str,
        url: str,
        title: str,
        content: str,
        snippet: str,
        published_at: datetime,
        author: str | None = None,
        category: str | None = None,
    ) -> str | None:
        """Add a new article. Returns article ID or None if duplicate."""
        article_id = str(uuid.uuid4())
        now = to_timestamp(utc_now())
        with self._db.conn() as conn:
            try:
                conn.execute(
                    """INSERT INTO articles
                       (id, feed_id, title, content, snippet, author, published_at, url,
                        category, created_at, updated_at)
                       VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                    (article_id, feed_id, title, content, snippet, author,
                     to_timestamp(published_at), url, category, now, now)
                )
            except sqlite3.IntegrityError:
                # Duplicate URL
                return None
        return article_id

    def exists_by_url(self, url: str) -> bool:
        with self._db.conn() as conn:
            row = conn.execute("SELECT 1 FROM articles WHERE url = ?", (url,)).fetchone()
            return row is not None

    def get(self, article_id: str) -> DBArticle | None:
        """Get single article by ID."""
        with self._db.conn() as conn:
            row = conn.execute(
                "SELECT * FROM articles WHERE id = ?", (article_id,)
            ).fetchone()
            return row_to_article(row) if row else None

    def get_many(
        self,
        category: str | None = None,
        status: str | None = None,
        feed_id: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[list[DBArticle], int]:
        """
        List non-archived articles, newest first.

        Args:
            category: Exact category match
            status: "read" or "unread"; anything else is ignored
            feed_id: Restrict to one feed
            limit: Page size (no limit when None)
            offset: Rows to skip

        Returns:
            (articles, total) where total ignores limit/offset
        """
        where = ["is_archived = FALSE"]
        params: list = []

        if category:
            where.append("category = ?")
            params.append(category)

        if status == "read":
            where.append("is_read = TRUE")
        elif status == "unread":
            where.append("is_read = FALSE")

        if feed_id:
            where.append("feed_id = ?")
            params.append(feed_id)

        clause = " AND ".join(where)
        query = f"SELECT * FROM articles WHERE {clause} ORDER BY published_at DESC"
        page_params = list(params)
        if limit is not None:
            query += " LIMIT ?"
            page_params.append(limit)
            if offset:
                query += " OFFSET ?"
                page_params.append(offset)
        elif offset:
            query += " LIMIT -1 OFFSET ?"
            page_params.append(offset)

        with self._db.conn() as conn:
            total = conn.execute(
                f"SELECT COUNT(*) AS count FROM articles WHERE {clause}", params
            ).fetchone()["count"]
            rows = conn.execute(query, page_params).fetchall()
            return [row_to_article(row) for row in rows], total

    def update(self, article_id: str, fields: dict) -> DBArticle | None:
        """Patch the given columns. Returns the updated article or None if missing."""
        updates = {k: v for k, v in fields.items() if k in self.UPDATABLE}
        if updates:
            assignments = ", ".join(f"{column} = ?" for column in updates)
            with self._db.conn() as conn:
                conn.execute(
                    f"UPDATE articles SET {assignments} WHERE id = ?",
                    (*updates.values(), article_id)
                )
        return self.get(article_id)

    def delete(self, article_id: str) -> bool:
        with self._db.conn() as conn:
            cursor = conn.execute("DELETE FROM articles WHERE id = ?", (article_id,))
            return cursor.rowcount > 0

    def trim_feed(self, feed_id: str, keep: int) -> int:
        """Delete all but the ``keep`` most recently published articles of a feed."""
        with self._db.conn() as conn:
            cursor = conn.execute(
                """DELETE FROM articles
                   WHERE feed_id = ? AND id NOT IN (
                       SELECT id FROM articles WHERE feed_id = ?
                       ORDER BY published_at DESC LIMIT ?
                   )""",
                (feed_id, feed_id, keep)
            )
            return cursor.rowcount
