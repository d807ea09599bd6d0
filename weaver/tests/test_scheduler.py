"""
Tests for the feed refresh scheduler.
"""

import asyncio

import pytest

from weaver.config import state
from weaver.scheduler import FeedRefreshScheduler


class CountingFetcher:
    def __init__(self):
        self.runs = 0

    async def fetch_all_feeds(self):
        self.runs += 1


class TestInterval:
    """Tests for reading the refresh interval from settings."""

    def test_default_interval(self, test_db):
        assert FeedRefreshScheduler(test_db)._read_interval() == 30

    def test_interval_follows_setting(self, test_db):
        scheduler = FeedRefreshScheduler(test_db)
        test_db.set_setting("refresh_interval", "5")
        assert scheduler._read_interval() == 5

    def test_invalid_interval_falls_back(self, test_db):
        test_db.set_setting("refresh_interval", "soon")
        assert FeedRefreshScheduler(test_db)._read_interval() == 30


class TestRefreshRuns:
    """Tests for scheduled refresh execution."""

    @pytest.mark.asyncio
    async def test_runs_refresh_after_initial_delay(self, test_db, saved_state):
        fetcher = CountingFetcher()
        state.feed_fetcher = fetcher
        state.refresh_in_progress = False

        scheduler = FeedRefreshScheduler(test_db, initial_delay=0)
        await scheduler.start()
        assert scheduler.running is True
        await asyncio.sleep(0.05)
        await scheduler.stop()

        assert fetcher.runs == 1
        assert scheduler.running is False
        assert state.refresh_in_progress is False

    @pytest.mark.asyncio
    async def test_skips_while_manual_refresh_running(self, test_db, saved_state):
        fetcher = CountingFetcher()
        state.feed_fetcher = fetcher
        state.refresh_in_progress = True

        await FeedRefreshScheduler(test_db)._do_refresh()

        assert fetcher.runs == 0
