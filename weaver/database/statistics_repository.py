"""
Statistics repository - dashboard counts.
"""

from datetime import timedelta

from .connection import DatabaseConnection
from .converters import to_timestamp, utc_now


class StatisticsRepository:
    """Repository for aggregate counts across the store."""

    def __init__(self, db: DatabaseConnection):
        self._db = db

    def totals(self) -> dict[str, int]:
        """Row counts for feeds, live articles, workspace items and reports."""
        with self._db.conn() as conn:
            def count(query: str) -> int:
                return conn.execute(query).fetchone()["count"]

            return {
                "feeds": count("SELECT COUNT(*) AS count FROM feeds"),
                "articles": count(
                    "SELECT COUNT(*) AS count FROM articles WHERE is_archived = FALSE"
                ),
                "workspace_items": count("SELECT COUNT(*) AS count FROM workspace_items"),
                "reports": count("SELECT COUNT(*) AS count FROM reports"),
            }

    def category_counts(self) -> list[dict]:
        """Live article count per category, largest first."""
        with self._db.conn() as conn:
            rows = conn.execute(
                """SELECT category, COUNT(*) AS count
                   FROM articles
                   WHERE is_archived = FALSE AND category IS NOT NULL
                   GROUP BY category
                   ORDER BY count DESC"""
            ).fetchall()
            return [{"category": row["category"], "count": row["count"]} for row in rows]

    def articles_added_since(self, hours: int = 24) -> int:
        cutoff = to_timestamp(utc_now() - timedelta(hours=hours))
        with self._db.conn() as conn:
            return conn.execute(
                "SELECT COUNT(*) AS count FROM articles WHERE created_at > ?", (cutoff,)
            ).fetchone()["count"]
