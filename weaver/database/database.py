"""
Database facade - provides unified access to all repositories.

Services talk to this class; each group of methods delegates to one
specialized repository.
"""

from datetime import datetime
from pathlib import Path

from .connection import DatabaseConnection
from .article_repository import ArticleRepository
from .embedding_repository import EmbeddingRepository
from .feed_repository import FeedRepository
from .report_repository import ReportRepository
from .settings_repository import SettingsRepository
from .statistics_repository import StatisticsRepository
from .workspace_repository import WorkspaceRepository
from .models import DBArticle, DBEmbedding, DBFeed, DBReport, DBWorkspaceItem


class Database:
    """Unified database access facade."""

    def __init__(self, db_path: Path):
        self._connection = DatabaseConnection(db_path)

        # Initialize repositories
        self.feeds = FeedRepository(self._connection)
        self.articles = ArticleRepository(self._connection)
        self.workspace = WorkspaceRepository(self._connection)
        self.reports = ReportRepository(self._connection)
        self.settings = SettingsRepository(self._connection)
        self.embeddings = EmbeddingRepository(self._connection)
        self.statistics = StatisticsRepository(self._connection)

    # ─────────────────────────────────────────────────────────────
    # Feed operations (delegated to FeedRepository)
    # ─────────────────────────────────────────────────────────────

    def add_feed(self, name: str, url: str, category: str = "Uncategorized") -> str:
        return self.feeds.add(name, url, category)

    def get_feed(self, feed_id: str) -> DBFeed | None:
        return self.feeds.get(feed_id)

    def get_feed_by_url(self, url: str) -> DBFeed | None:
        return self.feeds.get_by_url(url)

    def get_feeds(self, active_only: bool = False) -> list[DBFeed]:
        return self.feeds.get_all(active_only=active_only)

    def update_feed(self, feed_id: str, fields: dict) -> DBFeed | None:
        return self.feeds.update(feed_id, fields)

    def update_feed_fetched(self, feed_id: str):
        return self.feeds.update_fetched(feed_id)

    def delete_feed(self, feed_id: str) -> bool:
        return self.feeds.delete(feed_id)

    def get_categories(self) -> list[str]:
        return self.feeds.get_categories()

    # ─────────────────────────────────────────────────────────────
    # Article operations (delegated to ArticleRepository)
    # ─────────────────────────────────────────────────────────────

    def add_article(
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
        return self.articles.add(
            feed_id, url, title, content, snippet, published_at,
            author=author, category=category,
        )

    def article_exists(self, url: str) -> bool:
        return self.articles.exists_by_url(url)

    def get_article(self, article_id: str) -> DBArticle | None:
        return self.articles.get(article_id)

    def get_articles(
        self,
        category: str | None = None,
        status: str | None = None,
        feed_id: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[list[DBArticle], int]:
        return self.articles.get_many(category, status, feed_id, limit, offset)

    def update_article(self, article_id: str, fields: dict) -> DBArticle | None:
        return self.articles.update(article_id, fields)

    def delete_article(self, article_id: str) -> bool:
        return self.articles.delete(article_id)

    def trim_feed_articles(self, feed_id: str, keep: int) -> int:
        return self.articles.trim_feed(feed_id, keep)

    # ─────────────────────────────────────────────────────────────
    # Workspace operations (delegated to WorkspaceRepository)
    # ─────────────────────────────────────────────────────────────

    def add_workspace_item(self, article_id: str) -> DBWorkspaceItem | None:
        return self.workspace.add(article_id)

    def get_workspace_item(self, item_id: str) -> DBWorkspaceItem | None:
        return self.workspace.get(item_id)

    def get_workspace_items(self) -> list[DBWorkspaceItem]:
        return self.workspace.get_all()

    def update_workspace_item(self, item_id: str, fields: dict) -> DBWorkspaceItem | None:
        return self.workspace.update(item_id, fields)

    def delete_workspace_item(self, item_id: str) -> bool:
        return self.workspace.delete(item_id)

    def reorder_workspace(self, item_ids: list[str]) -> int:
        return self.workspace.reorder(item_ids)

    def clear_workspace(self) -> int:
        return self.workspace.clear()

    # ─────────────────────────────────────────────────────────────
    # Report operations (delegated to ReportRepository)
    # ─────────────────────────────────────────────────────────────

    def create_report(
        self,
        title: str,
        description: str | None = None,
        status: str = "draft",
        copy_workspace: bool = False,
    ) -> DBReport | None:
        return self.reports.create(title, description, status, copy_workspace)

    def get_report(self, report_id: str) -> DBReport | None:
        return self.reports.get(report_id)

    def get_reports(self) -> list[DBReport]:
        return self.reports.get_all()

    def update_report(self, report_id: str, fields: dict) -> DBReport | None:
        return self.reports.update(report_id, fields)

    def delete_report(self, report_id: str) -> bool:
        return self.reports.delete(report_id)

    # ─────────────────────────────────────────────────────────────
    # Settings operations (delegated to SettingsRepository)
    # ─────────────────────────────────────────────────────────────

    def get_setting(self, key: str, default: str | None = None) -> str | None:
        return self.settings.get(key, default)

    def set_setting(self, key: str, value: str):
        return self.settings.set(key, value)

    def set_settings(self, values: dict[str, str]):
        return self.settings.set_many(values)

    def get_all_settings(self) -> dict[str, str]:
        return self.settings.get_all()

    def reset_settings(self):
        return self.settings.reset()

    # ─────────────────────────────────────────────────────────────
    # Embedding operations (delegated to EmbeddingRepository)
    # ─────────────────────────────────────────────────────────────

    def save_embedding(self, article_id: str, vector: list[float], model: str | None = None):
        return self.embeddings.save(article_id, vector, model)

    def get_embedding(self, article_id: str) -> DBEmbedding | None:
        return self.embeddings.get(article_id)

    def has_embedding(self, article_id: str) -> bool:
        return self.embeddings.exists(article_id)

    def get_embedded_articles(self) -> list[tuple[DBArticle, DBEmbedding]]:
        return self.embeddings.get_active_with_articles()

    def get_articles_without_embeddings(self, limit: int) -> list[DBArticle]:
        return self.embeddings.get_articles_missing(limit)

    def embedding_counts(self) -> tuple[int, int]:
        return self.embeddings.counts()

    # ─────────────────────────────────────────────────────────────
    # Statistics (delegated to StatisticsRepository)
    # ─────────────────────────────────────────────────────────────

    def get_totals(self) -> dict[str, int]:
        return self.statistics.totals()

    def get_category_counts(self) -> list[dict]:
        return self.statistics.category_counts()

    def count_articles_since(self, hours: int = 24) -> int:
        return self.statistics.articles_added_since(hours)
