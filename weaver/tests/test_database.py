"""
Tests for the storage layer: cascades, workspace ordering and settings.
"""

import sqlite3
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest


def _article(db, feed_id, n):
    return db.add_article(
        feed_id=feed_id,
        url=f"https://example.com/{n}",
        title=f"Article {n}",
        content=f"Content {n}",
        snippet=f"Snippet {n}",
        published_at=datetime(2025, 1, 1, n, tzinfo=timezone.utc),
    )


@pytest.fixture
def seeded(test_db):
    feed_id = test_db.add_feed("Feed", "https://example.com/feed.xml", "News")
    article_ids = [_article(test_db, feed_id, n) for n in range(3)]
    return test_db, feed_id, article_ids


class TestFeedsAndArticles:
    """Tests for feed and article storage."""

    def test_duplicate_feed_url(self, test_db):
        test_db.add_feed("One", "https://example.com/feed.xml")
        with pytest.raises(sqlite3.IntegrityError):
            test_db.add_feed("Two", "https://example.com/feed.xml")

    def test_duplicate_article_url_returns_none(self, seeded):
        db, feed_id, _ = seeded
        duplicate = db.add_article(
            feed_id=feed_id,
            url="https://example.com/0",
            title="Again",
            content="",
            snippet="",
            published_at=datetime.now(timezone.utc),
        )
        assert duplicate is None

    def test_updated_at_changes_on_update(self, seeded):
        db, feed_id, article_ids = seeded
        before = db.get_article(article_ids[0])
        after = db.update_article(article_ids[0], {"is_read": True})
        assert after.is_read is True
        assert after.updated_at >= before.updated_at
        assert after.created_at == before.created_at

    def test_trim_keeps_newest(self, seeded):
        db, feed_id, article_ids = seeded
        assert db.trim_feed_articles(feed_id, 2) == 1
        assert db.get_article(article_ids[0]) is None
        assert db.get_article(article_ids[2]) is not None


class TestCascades:
    """Deleting a parent removes everything that hangs off it."""

    def test_feed_delete_cascades(self, seeded):
        db, feed_id, article_ids = seeded
        item = db.add_workspace_item(article_ids[0])
        report = db.create_report("Brief", copy_workspace=True)
        db.save_embedding(article_ids[0], [0.1, 0.2], "m")

        assert db.delete_feed(feed_id) is True

        assert db.get_article(article_ids[0]) is None
        assert db.get_workspace_item(item.id) is None
        assert db.get_report(report.id).items == []
        assert db.get_embedding(article_ids[0]) is None

    def test_article_delete_cascades(self, seeded):
        db, _, article_ids = seeded
        removed = db.add_workspace_item(article_ids[0])
        kept = db.add_workspace_item(article_ids[1])
        report = db.create_report("Brief", copy_workspace=True)

        assert db.delete_article(article_ids[0]) is True

        assert db.get_workspace_item(removed.id) is None
        assert db.get_workspace_item(kept.id) is not None
        items = db.get_report(report.id).items
        assert [i.workspace_item_id for i in items] == [kept.id]
        assert db.delete_article(article_ids[0]) is False

    def test_report_delete_keeps_workspace(self, seeded):
        db, feed_id, article_ids = seeded
        item = db.add_workspace_item(article_ids[0])
        report = db.create_report("Brief", copy_workspace=True)

        db.delete_report(report.id)

        assert db.get_workspace_item(item.id) is not None


class TestWorkspace:
    """Tests for workspace ordering and uniqueness."""

    def test_add_assigns_next_order(self, seeded):
        db, _, article_ids = seeded
        orders = [db.add_workspace_item(a).order_index for a in article_ids]
        assert orders == [0, 1, 2]

    def test_add_after_removal_uses_max_plus_one(self, seeded):
        db, _, article_ids = seeded
        first = db.add_workspace_item(article_ids[0])
        db.add_workspace_item(article_ids[1])
        db.delete_workspace_item(first.id)

        assert db.add_workspace_item(article_ids[2]).order_index == 2

    def test_duplicate_article_returns_none(self, seeded):
        db, _, article_ids = seeded
        db.add_workspace_item(article_ids[0])
        assert db.add_workspace_item(article_ids[0]) is None
        assert len(db.get_workspace_items()) == 1

    def test_concurrent_adds_insert_one_row(self, seeded):
        db, _, article_ids = seeded
        barrier = threading.Barrier(2)

        def add():
            barrier.wait()
            return db.add_workspace_item(article_ids[0])

        with ThreadPoolExecutor(max_workers=2) as pool:
            results = list(pool.map(lambda _: add(), range(2)))

        assert sum(r is not None for r in results) == 1
        items = db.get_workspace_items()
        assert len(items) == 1
        assert items[0].order_index == 0

    def test_update_sets_edited_flag(self, seeded):
        db, _, article_ids = seeded
        item = db.add_workspace_item(article_ids[0])
        updated = db.update_workspace_item(item.id, {"custom_content": None})
        assert updated.is_edited is True
        assert updated.custom_content is None

    def test_clear(self, seeded):
        db, _, article_ids = seeded
        for a in article_ids:
            db.add_workspace_item(a)
        assert db.clear_workspace() == 3
        assert db.get_workspace_items() == []


class TestSettings:
    """Tests for the key/value settings store."""

    def test_defaults_seeded(self, test_db):
        assert test_db.get_setting("refresh_interval") == "30"
        assert test_db.get_setting("ai_provider") == "anthropic"

    def test_missing_key_returns_default(self, test_db):
        assert test_db.get_setting("ai_model") is None
        assert test_db.get_setting("ai_model", "fallback") == "fallback"

    def test_reset_restores_defaults(self, test_db):
        test_db.set_settings({"refresh_interval": "5", "ai_model": "x"})
        test_db.reset_settings()
        settings = test_db.get_all_settings()
        assert settings["refresh_interval"] == "30"
        assert "ai_model" not in settings
