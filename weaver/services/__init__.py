"""
Service layer for business logic.

Services encapsulate business logic, keeping routes as thin HTTP adapters.
Each service receives its dependencies via constructor injection.

Usage in routes:
    from ..services import WorkspaceServiceDep

    @router.get("/items")
    async def list_items(service: WorkspaceServiceDep):
        return service.list_items()
"""

from typing import Annotated

from fastapi import Depends

from ..config import state, get_db
from ..database import Database

from .article_service import ArticleService
from .feed_service import FeedService
from .report_service import ReportService
from .settings_service import SettingsService
from .workspace_service import WorkspaceService

__all__ = [
    # Services
    "ArticleService",
    "FeedService",
    "ReportService",
    "SettingsService",
    "WorkspaceService",
    # Dependency factories
    "get_article_service",
    "get_feed_service",
    "get_report_service",
    "get_settings_service",
    "get_workspace_service",
    # Type aliases for dependency injection
    "ArticleServiceDep",
    "FeedServiceDep",
    "ReportServiceDep",
    "SettingsServiceDep",
    "WorkspaceServiceDep",
]


def get_article_service(db: Annotated[Database, Depends(get_db)]) -> ArticleService:
    """Dependency to get ArticleService instance."""
    return ArticleService(
        db=db,
        summarizer=state.summarizer,
        search_index=state.search_index,
    )


def get_feed_service(db: Annotated[Database, Depends(get_db)]) -> FeedService:
    """Dependency to get FeedService instance."""
    return FeedService(
        db=db,
        feed_fetcher=state.feed_fetcher,
    )


def get_workspace_service(db: Annotated[Database, Depends(get_db)]) -> WorkspaceService:
    return WorkspaceService(db=db)


def get_report_service(db: Annotated[Database, Depends(get_db)]) -> ReportService:
    return ReportService(db=db)


def get_settings_service(db: Annotated[Database, Depends(get_db)]) -> SettingsService:
    """Dependency to get SettingsService instance."""
    return SettingsService(db=db, summarizer=state.summarizer)


ArticleServiceDep = Annotated[ArticleService, Depends(get_article_service)]
FeedServiceDep = Annotated[FeedService, Depends(get_feed_service)]
WorkspaceServiceDep = Annotated[WorkspaceService, Depends(get_workspace_service)]
ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]
SettingsServiceDep = Annotated[SettingsService, Depends(get_settings_service)]
