"""TypedListCache - Pydantic 모델 리스트를 단일 JSON 배열 blob 으로 저장.

Usage:
    from newslens.domain import Alert
    cache = TypedListCache(store, "portfolio_news_cache", Alert)
    cache.set(alerts)
    alerts = cache.get()  # -> list[Alert] | None
"""

import logging
from typing import Generic, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from .base import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class TypedListCache(Generic[T]):
    """모델 리스트 직렬화/역직렬화를 보장하는 캐시. 필드명은 alias 로 직렬화."""

    def __init__(self, store: KeyValueStore, key: str, model_class: type[T]):
        self._store = store
        self._key = key
        self._adapter = TypeAdapter(list[model_class])

    @property
    def key(self) -> str:
        return self._key

    def get(self) -> list[T] | None:
        """캐시에서 읽기. 없으면 None, 파싱 실패 시 키 삭제 후 None."""
        raw = self._store.get(self._key)
        if raw is None:
            return None
        try:
            return self._adapter.validate_json(raw)
        except ValidationError:
            logger.warning("Cache parse failed for key=%s, discarding", self._key)
            self._store.delete(self._key)
            return None

    def set(self, values: list[T]) -> None:
        """리스트 전체 교체."""
        self._store.set(self._key, self._adapter.dump_json(values, by_alias=True).decode())

    def delete(self) -> None:
        self._store.delete(self._key)
