"""
Background tasks for feed fetching.
"""

import logging

from .config import state

logger = logging.getLogger(__name__)


async def refresh_all_feeds():
    """Background task to refresh all active feeds."""
    state.refresh_in_progress = True
    try:
        if state.feed_fetcher:
            await state.feed_fetcher.fetch_all_feeds()
    except Exception as e:
        logger.exception(f"Feed refresh failed: {e}")
    finally:
        state.refresh_in_progress = False


async def fetch_new_feed(feed_id: str):
    """Initial fetch for a freshly subscribed feed; failures are only logged."""
    if not state.feed_fetcher:
        return

    result = await state.feed_fetcher.fetch_feed(feed_id)
    if not result.success:
        logger.warning(f"Initial fetch of feed {feed_id} failed: {result.error}")
