"""
Database models - dataclasses for database entities.
"""

from dataclasses import dataclass, field
from datetime import datetime


DEFAULT_SYSTEM_PROMPT = (
    "You are a factual, neutral geopolitical analyst. Your task is to summarize "
    "the following article. Extract only the key facts, policy statements, and "
    "strategic arguments. Avoid speculative language and journalistic flair. "
    "Present the summary as a series of bullet points. The summary must be "
    "concise and no more than 150 words."
)

# Seeded into the settings table on schema init and restored by reset
DEFAULT_SETTINGS: dict[str, str] = {
    "ai_provider": "anthropic",
    "ai_system_prompt": DEFAULT_SYSTEM_PROMPT,
    "ai_max_tokens": "150",
    "ai_temperature": "0.3",
    "refresh_interval": "30",
    "max_articles_per_feed": "50",
}

REPORT_STATUSES = ("draft", "published")


@dataclass
class DBFeed:
    id: str
    name: str
    url: str
    category: str
    is_active: bool
    last_fetched: datetime | None
    created_at: datetime
    updated_at: datetime


@dataclass
class DBArticle:
    id: str
    feed_id: str
    title: str
    content: str
    snippet: str
    url: str
    published_at: datetime
    is_read: bool
    is_archived: bool
    created_at: datetime
    updated_at: datetime
    author: str | None = None
    category: str | None = None
    summary: str | None = None
    analysis: str | None = None


@dataclass
class DBWorkspaceItem:
    id: str
    article_id: str
    order_index: int
    custom_content: str | None
    custom_analysis: str | None
    is_edited: bool
    created_at: datetime
    updated_at: datetime
    article: DBArticle | None = None


@dataclass
class DBReportItem:
    """A report's link to a workspace item, joined with live content."""
    id: str
    report_id: str
    workspace_item_id: str
    order_index: int
    created_at: datetime
    workspace_item: DBWorkspaceItem | None = None


@dataclass
class DBReport:
    id: str
    title: str
    description: str | None
    status: str
    created_at: datetime
    updated_at: datetime
    items: list[DBReportItem] = field(default_factory=list)


@dataclass
class DBEmbedding:
    article_id: str
    vector: list[float]
    model: str | None
    created_at: datetime
