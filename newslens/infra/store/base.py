"""KeyValueStore 인터페이스 - 불투명 blob 의 get/set/delete.

알림 캐시는 저장소에 독립적. Redis, 인메모리 등 어떤 구현이든 주입 가능.
"""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """TTL 없는 키-값 저장소 계약. 값은 통째로 교체 (부분 갱신 없음)."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """값 조회. 없으면 None."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """값 전체 교체."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """키 삭제 (없어도 오류 아님)."""
        ...
