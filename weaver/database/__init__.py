"""
Database module - SQLite storage for feeds, articles, workspace and reports.

Uses repository pattern for better separation of concerns.
"""

from .connection import DatabaseConnection
from .models import (
    DBArticle,
    DBEmbedding,
    DBFeed,
    DBReport,
    DBReportItem,
    DBWorkspaceItem,
    DEFAULT_SETTINGS,
)
from .article_repository import ArticleRepository
from .embedding_repository import EmbeddingRepository
from .feed_repository import FeedRepository
from .report_repository import ReportRepository
from .settings_repository import SettingsRepository
from .statistics_repository import StatisticsRepository
from .workspace_repository import WorkspaceRepository
from .database import Database

__all__ = [
    "Database",
    "DatabaseConnection",
    "DBArticle",
    "DBEmbedding",
    "DBFeed",
    "DBReport",
    "DBReportItem",
    "DBWorkspaceItem",
    "DEFAULT_SETTINGS",
    "ArticleRepository",
    "EmbeddingRepository",
    "FeedRepository",
    "ReportRepository",
    "SettingsRepository",
    "StatisticsRepository",
    "WorkspaceRepository",
]
