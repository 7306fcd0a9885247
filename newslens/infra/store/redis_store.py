"""Redis 기반 KeyValueStore.

Usage:
    store = RedisStore(get_redis())
    store.set("portfolio_news_cache", "[]")
"""

from functools import lru_cache

import redis

from newslens.domain.config import get_config

from .base import KeyValueStore


@lru_cache
def get_redis() -> redis.Redis:
    """프로세스 전역 Redis 클라이언트 (싱글턴).

    테스트에서는 get_redis.cache_clear() 후 재생성.
    """
    config = get_config().redis
    return redis.Redis.from_url(
        config.url,
        decode_responses=True,
        socket_connect_timeout=config.connect_timeout,
        socket_timeout=config.socket_timeout,
        retry_on_timeout=True,
    )


class RedisStore(KeyValueStore):
    """단일 Redis 키에 blob 저장 (TTL 없음, 만료는 로드 시 계산)."""

    def __init__(self, client: redis.Redis, namespace: str = "newslens"):
        self._client = client
        self._namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}" if self._namespace else key

    def get(self, key: str) -> str | None:
        raw = self._client.get(self._key(key))
        if isinstance(raw, bytes):
            return raw.decode()
        return raw

    def set(self, key: str, value: str) -> None:
        self._client.set(self._key(key), value)

    def delete(self, key: str) -> None:
        self._client.delete(self._key(key))
