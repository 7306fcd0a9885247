"""Feed Fetcher - RSS 피드 동시 수집 -> Article 정규화 -> 신선도 필터.

피드 단위 실패 격리: 네트워크/파싱 오류, item 없음 모두 빈 리스트로 처리.

Usage:
    async with FeedFetcher() as fetcher:
        articles = await fetcher.fetch_all()          # 기본 선택 피드
        crypto = await fetcher.fetch_by_category("crypto")
"""

import asyncio
import logging
from datetime import UTC, datetime, timedelta

import httpx

from newslens.domain.config import FeedConfig, get_config
from newslens.domain.enums import FeedCategory
from newslens.domain.news import Article, FeedDescriptor
from newslens.exceptions import FeedFetchError
from newslens.infra.feeds import clean_description, parse_items, parse_pub_date
from newslens.infra.observability import log_context

from .feeds import feeds_by_category, selected_feeds

logger = logging.getLogger(__name__)

FEED_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/121.0.0.0 Safari/537.36"
    ),
    "Accept": "application/rss+xml, application/xml, text/xml, */*",
    "Accept-Language": "en-US,en;q=0.9",
    "Cache-Control": "no-cache",
}


def filter_fresh(
    articles: list[Article],
    now: datetime,
    window: timedelta = timedelta(hours=48),
    future_skew: timedelta = timedelta(hours=1),
) -> list[Article]:
    """[now - window, now + future_skew] 구간 기사만 남기고 최신순 정렬."""
    oldest = now - window
    newest = now + future_skew
    fresh = [a for a in articles if oldest <= a.published_at <= newest]
    return sorted(fresh, key=lambda a: a.published_at, reverse=True)


class FeedFetcher:
    """RSS 피드 수집기.

    Args:
        client: 공유 httpx.AsyncClient (없으면 내부 생성 후 aclose 시 정리)
        config: 피드 설정 (기본: get_config().feed)
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        config: FeedConfig | None = None,
    ):
        self._config = config or get_config().feed
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers=FEED_HEADERS,
            timeout=self._config.request_timeout,
            follow_redirects=True,
        )

    async def __aenter__(self) -> "FeedFetcher":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_feed(self, feed: FeedDescriptor, *, now: datetime | None = None) -> list[Article]:
        """단일 피드 수집. 최대 max_items_per_feed 건, 실패 시 빈 리스트 (예외 없음)."""
        with log_context(feed=feed.id):
            try:
                xml = await self._download(feed)
                return self._parse(feed, xml, now or datetime.now(UTC))
            except Exception as e:
                logger.warning("[%s] Feed fetch failed: %s", feed.name, e)
                return []

    async def fetch_all(
        self,
        feeds: list[FeedDescriptor] | None = None,
        *,
        now: datetime | None = None,
    ) -> list[Article]:
        """피드 동시 수집 -> 성공분 병합 -> 신선도 필터 -> 최신순."""
        feeds = selected_feeds(self._config) if feeds is None else feeds
        if not feeds:
            return []

        results = await asyncio.gather(
            *(self.fetch_feed(feed, now=now) for feed in feeds),
            return_exceptions=True,
        )

        merged: list[Article] = []
        for feed, result in zip(feeds, results, strict=True):
            if isinstance(result, BaseException):
                logger.warning("[%s] Feed task failed: %s", feed.name, result)
                continue
            merged.extend(result)

        fresh = filter_fresh(
            merged,
            now or datetime.now(UTC),
            window=timedelta(hours=self._config.freshness_hours),
            future_skew=timedelta(hours=self._config.future_skew_hours),
        )
        logger.info("Fetched %d articles from %d feeds (%d fresh)", len(merged), len(feeds), len(fresh))
        return fresh

    async def fetch_by_category(self, category: FeedCategory | str, *, now: datetime | None = None) -> list[Article]:
        feeds = feeds_by_category(category)
        if not feeds:
            return []
        return await self.fetch_all(feeds, now=now)

    async def _download(self, feed: FeedDescriptor) -> str:
        resp = await self._client.get(feed.url)
        resp.raise_for_status()

        # 프록시 응답 ({"contents": "<rss>..."}) 도 허용
        if "json" in resp.headers.get("content-type", ""):
            data = resp.json()
            contents = data.get("contents") if isinstance(data, dict) else None
            if not isinstance(contents, str):
                raise FeedFetchError(feed.id, "JSON payload without 'contents'")
            return contents
        return resp.text

    def _parse(self, feed: FeedDescriptor, xml: str, now: datetime) -> list[Article]:
        items = parse_items(xml, limit=self._config.max_items_per_feed)
        if not items:
            raise FeedFetchError(feed.id, "no <item> elements found")

        stamp = int(now.timestamp() * 1000)
        articles = []
        for i, item in enumerate(items):
            articles.append(
                Article(
                    id=f"{feed.id}-{i}-{stamp}",
                    title=item.title,
                    description=clean_description(item.description, self._config.description_limit),
                    content=item.content or item.description,
                    url=item.link,
                    source=feed.name,
                    published_at=parse_pub_date(item.pub_date, now),
                )
            )

        logger.debug("[%s] %d items parsed", feed.id, len(articles))
        return articles
