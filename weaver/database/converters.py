"""
Database row converters - convert SQLite rows to dataclasses.
"""

import sqlite3
from datetime import datetime, timezone

import numpy as np

from .models import DBArticle, DBEmbedding, DBFeed, DBReport, DBReportItem, DBWorkspaceItem


ARTICLE_COLUMNS = (
    "id", "feed_id", "title", "content", "snippet", "author", "published_at", "url",
    "is_read", "is_archived", "category", "summary", "analysis", "created_at", "updated_at",
)


def article_select(alias: str = "a", prefix: str = "a_") -> str:
    """SELECT list for article columns joined under ``prefix``."""
    return ", ".join(f"{alias}.{c} AS {prefix}{c}" for c in ARTICLE_COLUMNS)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_timestamp(value: datetime) -> str:
    """Serialize a datetime for storage, treating naive values as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def row_to_feed(row: sqlite3.Row) -> DBFeed:
    """Convert a database row to a DBFeed."""
    return DBFeed(
        id=row["id"],
        name=row["name"],
        url=row["url"],
        category=row["category"],
        is_active=bool(row["is_active"]),
        last_fetched=parse_timestamp(row["last_fetched"]),
        created_at=parse_timestamp(row["created_at"]) or utc_now(),
        updated_at=parse_timestamp(row["updated_at"]) or utc_now(),
    )


def row_to_article(row: sqlite3.Row, prefix: str = "") -> DBArticle:
    """
    Convert a database row to a DBArticle.

    ``prefix`` selects aliased columns when the article was joined onto
    another table (e.g. ``a_title``).
    """
    def col(name: str):
        return row[f"{prefix}{name}"]

    return DBArticle(
        id=col("id"),
        feed_id=col("feed_id"),
        title=col("title"),
        content=col("content"),
        snippet=col("snippet"),
        url=col("url"),
        published_at=parse_timestamp(col("published_at")) or utc_now(),
        is_read=bool(col("is_read")),
        is_archived=bool(col("is_archived")),
        created_at=parse_timestamp(col("created_at")) or utc_now(),
        updated_at=parse_timestamp(col("updated_at")) or utc_now(),
        author=col("author"),
        category=col("category"),
        summary=col("summary"),
        analysis=col("analysis"),
    )


def row_to_workspace_item(row: sqlite3.Row, with_article: bool = False) -> DBWorkspaceItem:
    """Convert a workspace_items row, optionally joined with its article."""
    return DBWorkspaceItem(
        id=row["id"],
        article_id=row["article_id"],
        order_index=row["order_index"],
        custom_content=row["custom_content"],
        custom_analysis=row["custom_analysis"],
        is_edited=bool(row["is_edited"]),
        created_at=parse_timestamp(row["created_at"]) or utc_now(),
        updated_at=parse_timestamp(row["updated_at"]) or utc_now(),
        article=row_to_article(row, prefix="a_") if with_article else None,
    )


def row_to_report(row: sqlite3.Row) -> DBReport:
    return DBReport(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        status=row["status"],
        created_at=parse_timestamp(row["created_at"]) or utc_now(),
        updated_at=parse_timestamp(row["updated_at"]) or utc_now(),
    )


def row_to_report_item(row: sqlite3.Row) -> DBReportItem:
    """Convert a report_items row joined with workspace item and article columns."""
    workspace_item = DBWorkspaceItem(
        id=row["workspace_item_id"],
        article_id=row["article_id"],
        order_index=row["w_order_index"],
        custom_content=row["custom_content"],
        custom_analysis=row["custom_analysis"],
        is_edited=bool(row["is_edited"]),
        created_at=parse_timestamp(row["w_created_at"]) or utc_now(),
        updated_at=parse_timestamp(row["w_updated_at"]) or utc_now(),
        article=row_to_article(row, prefix="a_"),
    )
    return DBReportItem(
        id=row["id"],
        report_id=row["report_id"],
        workspace_item_id=row["workspace_item_id"],
        order_index=row["order_index"],
        created_at=parse_timestamp(row["created_at"]) or utc_now(),
        workspace_item=workspace_item,
    )


def vector_to_blob(vector: list[float]) -> bytes:
    return np.asarray(vector, dtype=np.float32).tobytes()


def blob_to_vector(blob: bytes) -> list[float]:
    return np.frombuffer(blob, dtype=np.float32).tolist()


def row_to_embedding(row: sqlite3.Row) -> DBEmbedding:
    return DBEmbedding(
        article_id=row["article_id"],
        vector=blob_to_vector(row["embedding"]),
        model=row["model"],
        created_at=parse_timestamp(row["created_at"]) or utc_now(),
    )
