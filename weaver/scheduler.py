"""
Feed Refresh Scheduler.

Background task that periodically refreshes every active feed.
"""

import asyncio
import logging
from typing import TYPE_CHECKING

from .config import state
from .database.models import DEFAULT_SETTINGS
from .tasks import refresh_all_feeds

if TYPE_CHECKING:
    from .database import Database


logger = logging.getLogger(__name__)


class FeedRefreshScheduler:
    """
    Background scheduler for feed refreshes.

    The interval comes from the ``refresh_interval`` setting (minutes) and is
    re-read before every sleep, so edits take effect on the next cycle.
    """

    def __init__(self, db: "Database", initial_delay: float = 10):
        self.db = db
        self._task: asyncio.Task | None = None
        self._running = False
        self._initial_delay = initial_delay
        self._interval_minutes = int(DEFAULT_SETTINGS["refresh_interval"])

    @property
    def running(self) -> bool:
        return self._running

    def _read_interval(self) -> int:
        value = self.db.get_setting("refresh_interval")
        try:
            return max(int(value), 1)
        except (TypeError, ValueError):
            return int(DEFAULT_SETTINGS["refresh_interval"])

    async def start(self):
        """Start the refresh scheduler."""
        if self._running:
            return
        self._interval_minutes = self._read_interval()
        self._running = True
        self._task = asyncio.create_task(self._poll_loop())
        logger.info(f"Feed refresh scheduler started (interval: {self._interval_minutes} minutes)")

    async def stop(self):
        """Stop the refresh scheduler."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        logger.info("Feed refresh scheduler stopped")

    async def _poll_loop(self):
        """Main refresh loop."""
        # Initial delay to let the server fully start
        await asyncio.sleep(self._initial_delay)

        while self._running:
            try:
                await self._do_refresh()

                new_interval = self._read_interval()
                if new_interval != self._interval_minutes:
                    self._interval_minutes = new_interval
                    logger.info(f"Refresh interval updated to {self._interval_minutes} minutes")

            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.exception(f"Error in feed refresh loop: {e}")

            # Wait for next refresh
            await asyncio.sleep(self._interval_minutes * 60)

    async def _do_refresh(self):
        """Perform a single scheduled refresh unless a manual one is running."""
        if state.refresh_in_progress:
            logger.info("Refresh already in progress, skipping scheduled run")
            return
        await refresh_all_feeds()
