"""
Configuration and application state management.
"""

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from fastapi import HTTPException

if TYPE_CHECKING:
    from .database import Database
    from .feeds import FeedParser
    from .fetcher import FeedFetcher
    from .summarizer import Summarizer
    from .search import SimilarityIndex
    from .scheduler import FeedRefreshScheduler
    from .providers import LLMProvider

# Load environment variables
load_dotenv()


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse boolean from environment variable."""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


class Config:
    """Application configuration from environment."""
    # LLM Provider configuration
    ANTHROPIC_API_KEY: str = os.getenv("ANTHROPIC_API_KEY", "")
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")

    # Preferred provider: "anthropic", "openai", or "google".
    # The stored ai_provider setting wins over this when present.
    LLM_PROVIDER: str = os.getenv("LLM_PROVIDER", "")

    # Optional: override the default model for the selected provider
    LLM_MODEL: str = os.getenv("LLM_MODEL", "")
    EMBEDDING_MODEL: str = os.getenv("EMBEDDING_MODEL", "")

    DB_PATH: Path = Path(os.getenv("DB_PATH", "./data/weaver.db"))
    PORT: int = int(os.getenv("PORT", "5005"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    ENABLE_SCHEDULER: bool = _parse_bool(os.getenv("ENABLE_SCHEDULER"), default=True)

    # "jaccard" (word overlap) or "vector" (cosine over stored embeddings)
    SEARCH_BACKEND: str = os.getenv("SEARCH_BACKEND", "jaccard")


config = Config()


def configure_logging(level: str | None = None):
    """Set up root logging for the service."""
    logging.basicConfig(
        level=getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


class AppState:
    """Shared application state."""
    db: "Database | None" = None
    provider: "LLMProvider | None" = None  # completion provider
    embedding_provider: "LLMProvider | None" = None
    summarizer: "Summarizer | None" = None
    feed_parser: "FeedParser | None" = None
    feed_fetcher: "FeedFetcher | None" = None
    search_index: "SimilarityIndex | None" = None
    scheduler: "FeedRefreshScheduler | None" = None
    refresh_in_progress: bool = False


state = AppState()


def get_db() -> "Database":
    """Dependency to get database instance."""
    if not state.db:
        raise HTTPException(status_code=500, detail="Database not initialized")
    return state.db
