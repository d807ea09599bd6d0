"""
Database connection management and schema initialization.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .models import DEFAULT_SETTINGS

# ISO-8601 UTC, same shape as datetime.isoformat() on an aware datetime
SQL_NOW = "strftime('%Y-%m-%dT%H:%M:%f+00:00', 'now')"


def _updated_at_trigger(table: str, key: str = "id") -> str:
    return f"""
        CREATE TRIGGER IF NOT EXISTS {table}_updated_at
        AFTER UPDATE ON {table}
        FOR EACH ROW WHEN NEW.updated_at = OLD.updated_at
        BEGIN
            UPDATE {table} SET updated_at = {SQL_NOW} WHERE {key} = NEW.{key};
        END;
    """


class DatabaseConnection:
    """Manages database connection and schema."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    @contextmanager
    def conn(self) -> Iterator[sqlite3.Connection]:
        """Get database connection with row factory."""
        connection = sqlite3.connect(self.db_path)
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON")
        try:
            yield connection
            connection.commit()
        finally:
            connection.close()

    def _init_schema(self):
        """Initialize database schema."""
        with self.conn() as connection:
            connection.executescript("""
                CREATE TABLE IF NOT EXISTS feeds (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    url TEXT UNIQUE NOT NULL,
                    category TEXT NOT NULL DEFAULT 'Uncategorized',
                    is_active BOOLEAN NOT NULL DEFAULT TRUE,
                    last_fetched TIMESTAMP,
                    created_at TIMESTAMP NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                );

                CREATE TABLE IF NOT EXISTS articles (
                    id TEXT PRIMARY KEY,
                    feed_id TEXT NOT NULL REFERENCES feeds(id) ON DELETE CASCADE,
                    title TEXT NOT NULL,
                    content TEXT NOT NULL,
                    snippet TEXT NOT NULL,
                    author TEXT,
                    published_at TIMESTAMP NOT NULL,
                    url TEXT UNIQUE NOT NULL,
                    is_read BOOLEAN NOT NULL DEFAULT FALSE,
                    is_archived BOOLEAN NOT NULL DEFAULT FALSE,
                    category TEXT,
                    summary TEXT,
                    analysis TEXT,
                    created_at TIMESTAMP NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                );

                CREATE TABLE IF NOT EXISTS workspace_items (
                    id TEXT PRIMARY KEY,
                    article_id TEXT UNIQUE NOT NULL REFERENCES articles(id) ON DELETE CASCADE,
                    order_index INTEGER NOT NULL,
                    custom_content TEXT,
                    custom_analysis TEXT,
                    is_edited BOOLEAN NOT NULL DEFAULT FALSE,
                    created_at TIMESTAMP NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                );

                CREATE TABLE IF NOT EXISTS reports (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    description TEXT,
                    status TEXT NOT NULL DEFAULT 'draft'
                        CHECK(status IN ('draft', 'published')),
                    created_at TIMESTAMP NOT NULL,
                    updated_at TIMESTAMP NOT NULL
                );

                CREATE TABLE IF NOT EXISTS report_items (
                    id TEXT PRIMARY KEY,
                    report_id TEXT NOT NULL REFERENCES reports(id) ON DELETE CASCADE,
                    workspace_item_id TEXT NOT NULL
                        REFERENCES workspace_items(id) ON DELETE CASCADE,
                    order_index INTEGER NOT NULL,
                    created_at TIMESTAMP NOT NULL,
                    UNIQUE(report_id, workspace_item_id)
                );

                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value TEXT,
                    updated_at TIMESTAMP NOT NULL
                );

                CREATE TABLE IF NOT EXISTS article_embeddings (
                    article_id TEXT PRIMARY KEY REFERENCES articles(id) ON DELETE CASCADE,
                    embedding BLOB NOT NULL,
                    model TEXT,
                    created_at TIMESTAMP NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_articles_feed ON articles(feed_id);
                CREATE INDEX IF NOT EXISTS idx_articles_published ON articles(published_at DESC);
                CREATE INDEX IF NOT EXISTS idx_articles_category ON articles(category);
                CREATE INDEX IF NOT EXISTS idx_articles_read ON articles(is_read);
                CREATE INDEX IF NOT EXISTS idx_articles_archived ON articles(is_archived);
                CREATE INDEX IF NOT EXISTS idx_workspace_order ON workspace_items(order_index);
                CREATE INDEX IF NOT EXISTS idx_report_items_order
                    ON report_items(report_id, order_index);
            """)

            connection.executescript("".join(
                _updated_at_trigger(table)
                for table in ("feeds", "articles", "workspace_items", "reports")
            ) + _updated_at_trigger("settings", key="key"))

            self._seed_settings(connection)

    def _seed_settings(self, connection: sqlite3.Connection):
        """Insert default settings that are not present yet."""
        connection.executemany(
            f"INSERT OR IGNORE INTO settings (key, value, updated_at) VALUES (?, ?, {SQL_NOW})",
            list(DEFAULT_SETTINGS.items())
        )
