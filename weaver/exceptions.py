"""
HTTP exception utilities for common error patterns.

Every error the API returns is rendered as ``{"error": ..., "message": ...}``
by the handlers in ``server.py``. ``APIError`` lets a route pick the ``error``
title explicitly; plain ``HTTPException`` falls back to the status phrase.
"""

from typing import TypeVar

from fastapi import HTTPException

T = TypeVar("T")


class APIError(HTTPException):
    """HTTPException carrying an explicit error title."""

    def __init__(self, status_code: int, error: str, message: str):
        super().__init__(status_code=status_code, detail=message)
        self.error = error


class SummarizationError(Exception):
    """The language model could not produce a summary."""


class EmbeddingError(Exception):
    """The embedding provider could not produce a vector."""


class UnsupportedFormatError(ValueError):
    """Requested export format is not one of json, html, csv."""


def require_resource(resource: T | None, detail: str = "Resource not found") -> T:
    """
    Raise 404 if resource is None, otherwise return the resource.

    Usage:
        article = require_resource(db.get_article(id), "Article not found")
    """
    if resource is None:
        raise HTTPException(status_code=404, detail=detail)
    return resource


def require_article(article: T | None) -> T:
    """Raise 404 if article is None."""
    return require_resource(article, "Article not found")


def require_feed(feed: T | None) -> T:
    """Raise 404 if feed is None."""
    return require_resource(feed, "Feed not found")


def require_workspace_item(item: T | None) -> T:
    """Raise 404 if workspace item is None."""
    return require_resource(item, "Workspace item not found")


def require_report(report: T | None) -> T:
    """Raise 404 if report is None."""
    return require_resource(report, "Report not found")
