"""
Wiring of LLM providers, the summarizer and the search index into app state.
"""

import logging

from .config import config, state
from .database import Database
from .providers import get_embedding_provider_from_env, get_provider_from_env
from .search import create_index
from .summarizer import Summarizer

logger = logging.getLogger(__name__)


def configure_ai(db: Database):
    """
    (Re)build providers, summarizer and search index from keys and settings.

    The stored ai_provider setting wins over LLM_PROVIDER; without any API
    key the summarizer is left unset and AI routes answer 503.
    """
    preferred = db.get_setting("ai_provider") or config.LLM_PROVIDER or None
    model = db.get_setting("ai_model") or config.LLM_MODEL or None

    try:
        state.provider = get_provider_from_env(
            anthropic_key=config.ANTHROPIC_API_KEY or None,
            openai_key=config.OPENAI_API_KEY or None,
            google_key=config.GOOGLE_API_KEY or None,
            preferred_provider=preferred,
            default_model=model,
        )
        state.embedding_provider = get_embedding_provider_from_env(
            openai_key=config.OPENAI_API_KEY or None,
            google_key=config.GOOGLE_API_KEY or None,
            preferred_provider=preferred,
            embedding_model=config.EMBEDDING_MODEL or None,
        )
    except Exception as e:
        logger.error(f"Failed to initialize LLM provider: {e}")
        state.provider = None
        state.embedding_provider = None

    if state.provider:
        state.summarizer = Summarizer(
            provider=state.provider,
            db=db,
            embedding_provider=state.embedding_provider,
            embedding_model=config.EMBEDDING_MODEL or None,
        )
        logger.info(f"Using LLM provider: {state.provider.name}")
    else:
        state.summarizer = None
        logger.warning("No LLM API key configured - AI features disabled")

    state.search_index = create_index(config.SEARCH_BACKEND, db, state.summarizer)
    logger.info(f"Search backend: {state.search_index.name}")
