"""
Tests for the feed fetcher: dedup, entry cap, trimming and batch refresh.
"""

import pytest

from weaver.fetcher import FeedFetcher

FEED_URL = "https://example.com/feed.xml"


def _items(count: int, prefix: str = "story") -> list[dict]:
    # Day of month descends so item 0 is the newest
    return [
        {
            "title": f"{prefix.title()} {i}",
            "link": f"https://example.com/{prefix}/{i}",
            "description": f"<p>Body of {prefix} {i} &amp; more.</p>",
            "pubDate": f"{28 - i:02d} Jan 2025 10:00:00 GMT",
        }
        for i in range(count)
    ]


@pytest.fixture
def fetcher(test_db, feed_parser):
    return FeedFetcher(test_db, feed_parser)


class TestFetchFeed:
    """Tests for FeedFetcher.fetch_feed."""

    @pytest.mark.asyncio
    async def test_stores_new_articles(self, test_db, feed_parser, fetcher, rss):
        feed_id = test_db.add_feed("Example", FEED_URL, "Tech")
        feed_parser.register(FEED_URL, rss(_items(3)))

        result = await fetcher.fetch_feed(feed_id)

        assert result.success is True
        assert result.articles_added == 3
        articles, total = test_db.get_articles(feed_id=feed_id)
        assert total == 3
        assert all(a.category == "Tech" for a in articles)
        assert test_db.get_feed(feed_id).last_fetched is not None

    @pytest.mark.asyncio
    async def test_cleans_html_content(self, test_db, feed_parser, fetcher, rss):
        feed_id = test_db.add_feed("Example", FEED_URL)
        feed_parser.register(FEED_URL, rss(_items(1)))

        await fetcher.fetch_feed(feed_id)

        articles, _ = test_db.get_articles(feed_id=feed_id)
        assert articles[0].content == "Body of story 0 & more."
        assert "<p>" not in articles[0].snippet

    @pytest.mark.asyncio
    async def test_second_fetch_adds_nothing(self, test_db, feed_parser, fetcher, rss):
        feed_id = test_db.add_feed("Example", FEED_URL)
        feed_parser.register(FEED_URL, rss(_items(4)))

        await fetcher.fetch_feed(feed_id)
        result = await fetcher.fetch_feed(feed_id)

        assert result.success is True
        assert result.articles_added == 0
        assert test_db.get_articles(feed_id=feed_id)[1] == 4

    @pytest.mark.asyncio
    async def test_skips_entries_without_link_or_title(self, test_db, feed_parser, fetcher, rss):
        feed_id = test_db.add_feed("Example", FEED_URL)
        items = _items(2)
        items.append({"title": "No link here"})
        items.append({"link": "https://example.com/untitled"})
        feed_parser.register(FEED_URL, rss(items))

        result = await fetcher.fetch_feed(feed_id)

        assert result.articles_added == 2

    @pytest.mark.asyncio
    async def test_respects_max_articles_setting(self, test_db, feed_parser, fetcher, rss):
        test_db.set_setting("max_articles_per_feed", "3")
        feed_id = test_db.add_feed("Example", FEED_URL)
        feed_parser.register(FEED_URL, rss(_items(6)))

        result = await fetcher.fetch_feed(feed_id)

        assert result.articles_added == 3
        assert test_db.get_articles(feed_id=feed_id)[1] == 3

    @pytest.mark.asyncio
    async def test_trims_to_newest(self, test_db, feed_parser, fetcher, rss):
        test_db.set_setting("max_articles_per_feed", "3")
        feed_id = test_db.add_feed("Example", FEED_URL)
        feed_parser.register(FEED_URL, rss(_items(3, prefix="old")))
        await fetcher.fetch_feed(feed_id)

        newer = [
            {
                "title": f"New {i}",
                "link": f"https://example.com/new/{i}",
                "description": "Fresh",
                "pubDate": f"0{i + 1} Feb 2025 10:00:00 GMT",
            }
            for i in range(2)
        ]
        feed_parser.register(FEED_URL, rss(newer))
        await fetcher.fetch_feed(feed_id)

        articles, total = test_db.get_articles(feed_id=feed_id)
        assert total == 3
        titles = [a.title for a in articles]
        assert titles[:2] == ["New 1", "New 0"]
        assert titles[2] == "Old 0"

    @pytest.mark.asyncio
    async def test_fetch_failure_is_reported(self, test_db, fetcher):
        feed_id = test_db.add_feed("Broken", "https://example.com/missing.xml")

        result = await fetcher.fetch_feed(feed_id)

        assert result.success is False
        assert "404" in result.error
        assert test_db.get_feed(feed_id).last_fetched is None

    @pytest.mark.asyncio
    async def test_inactive_feed_is_not_fetched(self, test_db, feed_parser, fetcher, rss):
        feed_id = test_db.add_feed("Example", FEED_URL)
        test_db.update_feed(feed_id, {"is_active": False})
        feed_parser.register(FEED_URL, rss(_items(2)))

        result = await fetcher.fetch_feed(feed_id)

        assert result.success is False
        assert result.error == "Feed not found or inactive"
        assert feed_parser.requests == []

    @pytest.mark.asyncio
    async def test_unknown_feed(self, fetcher):
        result = await fetcher.fetch_feed("does-not-exist")
        assert result.success is False


class TestFetchAllFeeds:
    """Tests for FeedFetcher.fetch_all_feeds."""

    @pytest.mark.asyncio
    async def test_refreshes_active_feeds_only(self, test_db, feed_parser, fetcher, rss):
        urls = [f"https://example.com/feed{i}.xml" for i in range(7)]
        for i, url in enumerate(urls):
            test_db.add_feed(f"Feed {i}", url)
            feed_parser.register(url, rss(_items(1, prefix=f"feed{i}")))
        inactive = test_db.add_feed("Paused", "https://example.com/paused.xml")
        test_db.update_feed(inactive, {"is_active": False})

        await fetcher.fetch_all_feeds()

        assert sorted(feed_parser.requests) == sorted(urls)
        assert test_db.get_articles()[1] == 7

    @pytest.mark.asyncio
    async def test_one_failing_feed_does_not_stop_others(self, test_db, feed_parser, fetcher, rss):
        test_db.add_feed("Good", FEED_URL)
        test_db.add_feed("Bad", "https://example.com/bad.xml")
        feed_parser.register(FEED_URL, rss(_items(2)))

        await fetcher.fetch_all_feeds()

        assert test_db.get_articles()[1] == 2
