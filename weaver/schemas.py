"""
Pydantic models for API request/response validation.

Field names are snake_case in Python and camelCase on the wire; requests
accept either spelling.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .database import DBArticle, DBFeed, DBReport, DBReportItem, DBWorkspaceItem

ReportStatus = Literal["draft", "published"]


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(CamelModel):
    success: bool
    message: str


# ─────────────────────────────────────────────────────────────
# Feed Schemas
# ─────────────────────────────────────────────────────────────

class FeedResponse(CamelModel):
    id: str
    name: str
    url: str
    category: str
    is_active: bool
    last_fetched: str | None
    created_at: str
    updated_at: str

    @classmethod
    def from_db(cls, feed: DBFeed) -> "FeedResponse":
        return cls(
            id=feed.id,
            name=feed.name,
            url=feed.url,
            category=feed.category,
            is_active=feed.is_active,
            last_fetched=_iso(feed.last_fetched),
            created_at=feed.created_at.isoformat(),
            updated_at=feed.updated_at.isoformat(),
        )


class CreateFeedRequest(CamelModel):
    name: str | None = None
    url: str | None = None
    category: str | None = None
    is_active: bool = True


class UpdateFeedRequest(CamelModel):
    name: str | None = None
    url: str | None = None
    category: str | None = None
    is_active: bool | None = None


class FetchResultResponse(CamelModel):
    success: bool
    articles_added: int
    error: str | None = None


# ─────────────────────────────────────────────────────────────
# Article Schemas
# ─────────────────────────────────────────────────────────────

class ArticleResponse(CamelModel):
    id: str
    feed_id: str
    title: str
    content: str
    snippet: str
    author: str | None
    published_at: str
    url: str
    is_read: bool
    is_archived: bool
    category: str | None
    summary: str | None
    analysis: str | None
    created_at: str
    updated_at: str

    @classmethod
    def from_db(cls, article: DBArticle) -> "ArticleResponse":
        return cls(
            id=article.id,
            feed_id=article.feed_id,
            title=article.title,
            content=article.content,
            snippet=article.snippet,
            author=article.author,
            published_at=article.published_at.isoformat(),
            url=article.url,
            is_read=article.is_read,
            is_archived=article.is_archived,
            category=article.category,
            summary=article.summary,
            analysis=article.analysis,
            created_at=article.created_at.isoformat(),
            updated_at=article.updated_at.isoformat(),
        )


class ArticleListResponse(CamelModel):
    articles: list[ArticleResponse]
    total: int


class UpdateArticleRequest(CamelModel):
    is_read: bool | None = None
    is_archived: bool | None = None
    summary: str | None = None
    analysis: str | None = None


class SummaryResponse(CamelModel):
    summary: str
    cached: bool


class EmbeddingResponse(CamelModel):
    success: bool
    cached: bool
    message: str


class SearchRequest(CamelModel):
    query: str | None = None
    limit: int = Field(default=10, ge=1, le=100)


class SearchResultResponse(CamelModel):
    article_id: str
    score: float
    title: str
    snippet: str
    category: str | None
    published_at: str


class SearchResponse(CamelModel):
    results: list[SearchResultResponse]
    total: int
    query: str


class SimilarArticlesResponse(CamelModel):
    results: list[SearchResultResponse]
    total: int
    article_id: str


class BatchEmbeddingRequest(CamelModel):
    limit: int = Field(default=50, ge=1, le=500)


class BatchEmbeddingResponse(CamelModel):
    success: bool
    processed: int
    errors: int
    message: str


class EmbeddingStatsResponse(CamelModel):
    total_articles: int
    articles_with_embeddings: int
    coverage: float


# ─────────────────────────────────────────────────────────────
# Workspace Schemas
# ─────────────────────────────────────────────────────────────

class WorkspaceItemResponse(CamelModel):
    id: str
    article_id: str
    order: int
    custom_content: str | None
    custom_analysis: str | None
    is_edited: bool
    created_at: str
    updated_at: str
    article: ArticleResponse | None = None

    @classmethod
    def from_db(cls, item: DBWorkspaceItem) -> "WorkspaceItemResponse":
        return cls(
            id=item.id,
            article_id=item.article_id,
            order=item.order_index,
            custom_content=item.custom_content,
            custom_analysis=item.custom_analysis,
            is_edited=item.is_edited,
            created_at=item.created_at.isoformat(),
            updated_at=item.updated_at.isoformat(),
            article=ArticleResponse.from_db(item.article) if item.article else None,
        )


class AddWorkspaceItemRequest(CamelModel):
    article_id: str | None = None


class UpdateWorkspaceItemRequest(CamelModel):
    custom_content: str | None = None
    custom_analysis: str | None = None


class ReorderWorkspaceRequest(CamelModel):
    item_ids: list[str]


# ─────────────────────────────────────────────────────────────
# Report Schemas
# ─────────────────────────────────────────────────────────────

class ReportItemResponse(CamelModel):
    id: str
    workspace_item_id: str
    order_index: int
    created_at: str
    workspace_item: WorkspaceItemResponse | None = None

    @classmethod
    def from_db(cls, item: DBReportItem) -> "ReportItemResponse":
        return cls(
            id=item.id,
            workspace_item_id=item.workspace_item_id,
            order_index=item.order_index,
            created_at=item.created_at.isoformat(),
            workspace_item=(
                WorkspaceItemResponse.from_db(item.workspace_item)
                if item.workspace_item else None
            ),
        )


class ReportResponse(CamelModel):
    id: str
    title: str
    description: str | None
    status: str
    created_at: str
    updated_at: str
    items: list[ReportItemResponse] = []

    @classmethod
    def from_db(cls, report: DBReport) -> "ReportResponse":
        return cls(
            id=report.id,
            title=report.title,
            description=report.description,
            status=report.status,
            created_at=report.created_at.isoformat(),
            updated_at=report.updated_at.isoformat(),
            items=[ReportItemResponse.from_db(i) for i in report.items],
        )


class CreateReportRequest(CamelModel):
    title: str | None = None
    description: str | None = None
    status: ReportStatus = "draft"
    copy_workspace: bool = False


class UpdateReportRequest(CamelModel):
    title: str | None = None
    description: str | None = None
    status: ReportStatus | None = None


# ─────────────────────────────────────────────────────────────
# Settings Schemas
# ─────────────────────────────────────────────────────────────

class AISettings(CamelModel):
    provider: str
    system_prompt: str
    max_tokens: int
    temperature: float
    model: str | None = None


class SettingsResponse(CamelModel):
    ai: AISettings
    refresh_interval: int
    max_articles_per_feed: int


class AISettingsUpdate(CamelModel):
    provider: str | None = None
    system_prompt: str | None = None
    max_tokens: int | None = Field(default=None, ge=1)
    temperature: float | None = Field(default=None, ge=0, le=2)
    model: str | None = None


class SettingsUpdateRequest(CamelModel):
    ai: AISettingsUpdate | None = None
    refresh_interval: int | None = Field(default=None, ge=1)
    max_articles_per_feed: int | None = Field(default=None, ge=1)


class CategoryCount(CamelModel):
    category: str
    count: int


class StatsTotals(CamelModel):
    feeds: int
    articles: int
    workspace_items: int
    reports: int


class StatsActivity(CamelModel):
    articles_last_24_hours: int = Field(alias="articlesLast24Hours")


class StatsResponse(CamelModel):
    totals: StatsTotals
    categories: list[CategoryCount]
    activity: StatsActivity


class AITestResponse(CamelModel):
    success: bool
    message: str
