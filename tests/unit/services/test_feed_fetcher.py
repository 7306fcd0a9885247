"""Feed Fetcher 단위 테스트 - httpx.MockTransport 기반 (실제 네트워크 없음)."""

from datetime import UTC, datetime, timedelta
from email.utils import format_datetime

import httpx
import pytest

from newslens.domain.config import FeedConfig
from newslens.domain.enums import FeedCategory
from newslens.domain.news import FeedDescriptor
from newslens.services.news.feeds import FEEDS, feeds_by_category, get_feed, selected_feeds
from newslens.services.news.fetcher import FeedFetcher, filter_fresh

NOW = datetime(2026, 3, 2, 12, 0, tzinfo=UTC)


def _feed(feed_id: str) -> FeedDescriptor:
    return FeedDescriptor(id=feed_id, name=f"{feed_id} news", url=f"https://{feed_id}.test/rss")


def _item(title: str, age_hours: float, description: str = "<p>Body</p>") -> str:
    pub = format_datetime(NOW - timedelta(hours=age_hours))
    return (
        f"<item><title>{title}</title><link>https://x.test/{title}</link>"
        f"<pubDate>{pub}</pubDate><description><![CDATA[{description}]]></description></item>"
    )


def _rss(*items: str) -> str:
    return f"<rss><channel>{''.join(items)}</channel></rss>"


def _fetcher(handler) -> FeedFetcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FeedFetcher(client=client, config=FeedConfig())


# ─── Registry ───────────────────────────────────────────


class TestFeedRegistry:
    def test_ten_feeds(self):
        assert len(FEEDS) == 10
        assert len({f.id for f in FEEDS}) == 10

    def test_default_selection(self):
        ids = [f.id for f in selected_feeds(FeedConfig())]
        assert ids == ["et-market", "mint-top", "cnbc-finance", "wsj-markets", "coindesk"]

    def test_unknown_selected_ignored(self):
        assert [f.id for f in selected_feeds(FeedConfig(selected_ids="coindesk,bogus"))] == ["coindesk"]

    def test_by_category(self):
        crypto = feeds_by_category(FeedCategory.CRYPTO)
        assert {f.id for f in crypto} == {"coindesk", "bitcoin-mag", "cryptoslate"}
        assert feeds_by_category("tech")[0].id == "techcrunch"

    def test_get_feed(self):
        assert get_feed("wsj-markets").name == "WSJ Markets"
        assert get_feed("missing") is None


# ─── fetch_feed ─────────────────────────────────────────


class TestFetchFeed:
    @pytest.mark.asyncio
    async def test_parses_articles(self):
        xml = _rss(_item("First", 1, "<b>Hello</b> https://t.co/x"), _item("Second", 2))
        fetcher = _fetcher(lambda req: httpx.Response(200, text=xml))

        articles = await fetcher.fetch_feed(_feed("alpha"), now=NOW)

        assert [a.title for a in articles] == ["First", "Second"]
        first = articles[0]
        assert first.id == f"alpha-0-{int(NOW.timestamp() * 1000)}"
        assert first.source == "alpha news"
        assert first.description == "Hello"
        assert first.content == "<b>Hello</b> https://t.co/x"
        assert first.url == "https://x.test/First"
        assert first.published_at == NOW - timedelta(hours=1)
        assert first.market_relevance == 5

    @pytest.mark.asyncio
    async def test_caps_at_five_items(self):
        xml = _rss(*(_item(f"T{i}", i) for i in range(8)))
        fetcher = _fetcher(lambda req: httpx.Response(200, text=xml))
        assert len(await fetcher.fetch_feed(_feed("alpha"), now=NOW)) == 5

    @pytest.mark.asyncio
    async def test_content_encoded_preferred(self):
        xml = _rss(
            "<item><title>T</title><description>short</description>"
            "<content:encoded><![CDATA[<p>long body</p>]]></content:encoded></item>"
        )
        fetcher = _fetcher(lambda req: httpx.Response(200, text=xml))
        (article,) = await fetcher.fetch_feed(_feed("alpha"), now=NOW)
        assert article.content == "<p>long body</p>"
        assert article.description == "short"
        assert article.published_at == NOW

    @pytest.mark.asyncio
    async def test_no_items_returns_empty(self):
        fetcher = _fetcher(lambda req: httpx.Response(200, text="<html>blocked</html>"))
        assert await fetcher.fetch_feed(_feed("alpha"), now=NOW) == []

    @pytest.mark.asyncio
    async def test_http_error_returns_empty(self):
        fetcher = _fetcher(lambda req: httpx.Response(503))
        assert await fetcher.fetch_feed(_feed("alpha"), now=NOW) == []

    @pytest.mark.asyncio
    async def test_transport_error_returns_empty(self):
        def handler(req):
            raise httpx.ConnectTimeout("timed out", request=req)

        assert await _fetcher(handler).fetch_feed(_feed("alpha"), now=NOW) == []

    @pytest.mark.asyncio
    async def test_json_proxy_payload(self):
        xml = _rss(_item("Proxied", 1))
        fetcher = _fetcher(lambda req: httpx.Response(200, json={"contents": xml}))
        articles = await fetcher.fetch_feed(_feed("alpha"), now=NOW)
        assert [a.title for a in articles] == ["Proxied"]

    @pytest.mark.asyncio
    async def test_json_without_contents_returns_empty(self):
        fetcher = _fetcher(lambda req: httpx.Response(200, json={"error": "nope"}))
        assert await fetcher.fetch_feed(_feed("alpha"), now=NOW) == []


# ─── fetch_all ──────────────────────────────────────────


class TestFetchAll:
    @pytest.mark.asyncio
    async def test_failing_feed_isolated(self):
        """5개 중 1개 피드 실패 -> 나머지 4개 결과는 정상 집계."""
        feeds = [_feed(f"f{i}") for i in range(5)]

        def handler(req):
            host = req.url.host
            if host == "f2.test":
                raise httpx.ConnectError("refused", request=req)
            index = int(host[1])
            return httpx.Response(200, text=_rss(_item(f"{host}-story", index + 0.5)))

        articles = await _fetcher(handler).fetch_all(feeds, now=NOW)

        assert [a.title for a in articles] == ["f0.test-story", "f1.test-story", "f3.test-story", "f4.test-story"]

    @pytest.mark.asyncio
    async def test_freshness_window_and_sort(self):
        xml = _rss(
            _item("stale", 49),
            _item("edge", 47.9),
            _item("recent", 0.5),
            _item("near-future", -0.5),
            _item("far-future", -2),
        )
        articles = await _fetcher(lambda req: httpx.Response(200, text=xml)).fetch_all([_feed("alpha")], now=NOW)
        assert [a.title for a in articles] == ["near-future", "recent", "edge"]

    @pytest.mark.asyncio
    async def test_empty_feed_list(self):
        assert await _fetcher(lambda req: httpx.Response(200)).fetch_all([], now=NOW) == []

    @pytest.mark.asyncio
    async def test_fetch_by_category_uses_registry(self):
        requested = []

        def handler(req):
            requested.append(req.url.host)
            return httpx.Response(200, text=_rss(_item("c", 1)))

        articles = await _fetcher(handler).fetch_by_category("tech", now=NOW)
        assert requested == ["techcrunch.com"]
        assert len(articles) == 1


class TestFilterFresh:
    def test_bounds_inclusive(self):
        from newslens.domain.news import Article

        def art(ts):
            return Article(id=str(ts), title="t", source="s", published_at=ts)

        old = art(NOW - timedelta(hours=48))
        future = art(NOW + timedelta(hours=1))
        fresh = filter_fresh([old, future], NOW)
        assert fresh == [future, old]
