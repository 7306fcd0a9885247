"""E2E 테스트 공용 Fixtures.

Mock RSS transport + FakeRedis 로 갱신 주기 전체를 외부 의존 없이 구동.
"""

import os
from unittest.mock import patch

import fakeredis
import httpx
import pytest

from newslens.domain.config import FeedConfig, get_config
from newslens.infra.store import RedisStore
from newslens.services.news.alert_cache import AlertCache
from newslens.services.news.alerts import AlertScorer
from newslens.services.news.fetcher import FeedFetcher
from newslens.services.news.pipeline import RefreshPipeline

from mock_feeds import FeedState, create_mock_transport

_TEST_ENV = {
    "APP_ENV": "test",
    "APP_STORE_BACKEND": "redis",
    "FEED_SELECTED_IDS": "et-market,mint-top,cnbc-finance,wsj-markets,coindesk",
    "ALERT_RELEVANCE_THRESHOLD": "0.3",
}


@pytest.fixture(autouse=True)
def _patch_config():
    """모든 E2E 테스트에서 config 캐시를 클리어하고 테스트 환경 변수 주입."""
    get_config.cache_clear()
    with patch.dict(os.environ, _TEST_ENV, clear=False):
        yield
    get_config.cache_clear()


@pytest.fixture
def feed_state() -> FeedState:
    return FeedState()


@pytest.fixture
def test_redis() -> fakeredis.FakeRedis:
    """격리된 FakeRedis 인스턴스."""
    r = fakeredis.FakeRedis(decode_responses=True)
    yield r
    r.flushall()
    r.close()


@pytest.fixture
def alert_cache(test_redis) -> AlertCache:
    return AlertCache(RedisStore(test_redis))


@pytest.fixture
def pipeline(feed_state, alert_cache) -> RefreshPipeline:
    client = httpx.AsyncClient(transport=create_mock_transport(feed_state))
    fetcher = FeedFetcher(client=client, config=FeedConfig())
    return RefreshPipeline(fetcher, alert_cache, AlertScorer())
