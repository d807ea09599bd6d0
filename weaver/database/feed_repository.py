"""
Feed repository - CRUD operations for feeds.
"""

import uuid

from .connection import DatabaseConnection
from .converters import row_to_feed, to_timestamp, utc_now
from .models import DBFeed


class FeedRepository:
    """Repository for feed operations."""

    # Columns a PATCH may touch
    UPDATABLE = ("name", "url", "category", "is_active")

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def add(self, name: str, url: str, category: str = "Uncategorized") -> str:
        """
        Add a new feed. Returns feed ID.

        Raises sqlite3.IntegrityError if the URL is already subscribed.
        """
        feed_id = str(uuid.uuid4())
        now = to_timestamp(utc_now())
        with self._db.conn() as conn:
            conn.execute(
                """INSERT INTO feeds (id, name, url, category, is_active, created_at, updated_at)
                   VALUES (?, ?, ?, ?, TRUE, ?, ?)""",
                (feed_id, name, url, category, now, now)
            )
        return feed_id

    def get(self, feed_id: str) -> DBFeed | None:
        """Get single feed by ID."""
        with self._db.conn() as conn:
            row = conn.execute("SELECT * FROM feeds WHERE id = ?", (feed_id,)).fetchone()
            return row_to_feed(row) if row else None

    def get_by_url(self, url: str) -> DBFeed | None:
        with self._db.conn() as conn:
            row = conn.execute("SELECT * FROM feeds WHERE url = ?", (url,)).fetchone()
            return row_to_feed(row) if row else None

    def get_all(self, active_only: bool = False) -> list[DBFeed]:
        """Get all feeds ordered by name."""
        query = "SELECT * FROM feeds"
        if active_only:
            query += " WHERE is_active = TRUE"
        query += " ORDER BY name ASC"
        with self._db.conn() as conn:
            return [row_to_feed(row) for row in conn.execute(query).fetchall()]

    def update(self, feed_id: str, fields: dict) -> DBFeed | None:
        """Patch the given columns. Returns the updated feed or None if missing."""
        updates = {k: v for k, v in fields.items() if k in self.UPDATABLE}
        if updates:
            assignments = ", ".join(f"{column} = ?" for column in updates)
            with self._db.conn() as conn:
                conn.execute(
                    f"UPDATE feeds SET {assignments} WHERE id = ?",
                    (*updates.values(), feed_id)
                )
        return self.get(feed_id)

    def update_fetched(self, feed_id: str):
        """Update feed's last fetched timestamp."""
        with self._db.conn() as conn:
            conn.execute(
                "UPDATE feeds SET last_fetched = ? WHERE id = ?",
                (to_timestamp(utc_now()), feed_id)
            )

    def delete(self, feed_id: str) -> bool:
        """Delete feed; its articles (and their workspace/report links) cascade."""
        with self._db.conn() as conn:
            cursor = conn.execute("DELETE FROM feeds WHERE id = ?", (feed_id,))
            return cursor.rowcount > 0

    def get_categories(self) -> list[str]:
        """Distinct non-empty feed categories."""
        with self._db.conn() as conn:
            rows = conn.execute(
                """SELECT DISTINCT category FROM feeds
                   WHERE category IS NOT NULL AND category != ''
                   ORDER BY category"""
            ).fetchall()
            return [row["category"] for row in rows]
