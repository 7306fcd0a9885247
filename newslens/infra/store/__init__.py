"""Store infrastructure - key-value store interface, implementations, typed cache."""

from .base import KeyValueStore
from .cache import TypedListCache
from .memory import InMemoryStore
from .redis_store import RedisStore, get_redis

__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "RedisStore",
    "TypedListCache",
    "create_store",
    "get_redis",
]


def create_store(backend: str | None = None) -> KeyValueStore:
    """설정(APP_STORE_BACKEND)에 맞는 저장소 생성."""
    from newslens.domain.config import get_config

    backend = backend or get_config().store_backend
    if backend == "memory":
        return InMemoryStore()
    if backend == "redis":
        return RedisStore(get_redis())
    raise ValueError(f"Unknown store backend: {backend}")
