"""Alert Cache & Deduplicator - 48시간 윈도우 + (symbol, title) 중복 제거.

갱신 주기마다 이전 스냅샷과 신규 알림을 병합해 스냅샷 전체를 교체 저장.
중복 시 먼저 들어온 항목 유지: 이전 스냅샷(캐시)이 신규 알림보다 우선.

Usage:
    cache = AlertCache(create_store())
    result = cache.merge({"AAPL", "BTC"}, fresh_alerts)
    result.display   # 최신순 상위 20건
    result.snapshot  # 저장된 전체 목록
"""

import logging
from collections import OrderedDict
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from newslens.domain.config import AlertConfig, get_config
from newslens.domain.news import Alert
from newslens.infra.store import KeyValueStore, TypedListCache

logger = logging.getLogger(__name__)


class AlertIndex:
    """dedup_key -> Alert 순서 보존 인덱스 (first-wins).

    이미 등록된 키의 add 는 무시되며 기존 항목의 필드를 덮어쓰지 않는다.
    """

    def __init__(self, alerts: Iterable[Alert] = ()):
        self._entries: OrderedDict[str, Alert] = OrderedDict()
        for alert in alerts:
            self.add(alert)

    def add(self, alert: Alert) -> bool:
        """신규 키면 추가 후 True, 중복이면 False."""
        key = alert.dedup_key
        if key in self._entries:
            return False
        self._entries[key] = alert
        return True

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def values(self) -> list[Alert]:
        return list(self._entries.values())


@dataclass
class MergeResult:
    snapshot: list[Alert]
    display: list[Alert]
    new_alerts: list[Alert] = field(default_factory=list)  # 이번 병합에서 처음 등록된 알림

    @property
    def added(self) -> int:
        return len(self.new_alerts)


def sort_by_recency(alerts: Iterable[Alert]) -> list[Alert]:
    return sorted(alerts, key=lambda a: a.timestamp, reverse=True)


class AlertCache:
    """스냅샷 로드 -> 만료/비활성 제거 -> 병합 -> 중복 제거 -> 정렬 -> 저장.

    단일 writer 전제 (프로세스 간 락 없음). 동시 갱신은 RefreshPipeline 이 직렬화.

    Args:
        store: KeyValueStore (Redis / in-memory)
        key: 스냅샷 저장 키
        window: 신선도 윈도우 (기본 48시간)
        display_cap: 표시 건수 상한 (기본 20)
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str | None = None,
        window: timedelta | None = None,
        display_cap: int | None = None,
        config: AlertConfig | None = None,
    ):
        config = config or get_config().alert
        self._cache = TypedListCache(store, key or config.cache_key, Alert)
        self._window = window or timedelta(hours=config.freshness_hours)
        self._display_cap = config.display_cap if display_cap is None else display_cap

    def load(self) -> list[Alert]:
        """저장된 스냅샷. 없거나 손상 시 빈 리스트."""
        return self._cache.get() or []

    def is_fresh(self, alert: Alert, now: datetime) -> bool:
        return alert.timestamp >= now - self._window

    def merge(
        self,
        active_symbols: Iterable[str],
        fresh: list[Alert],
        now: datetime | None = None,
    ) -> MergeResult:
        now = now or datetime.now(UTC)
        active = {s.upper() for s in active_symbols}

        prior = self.load()
        survivors = [a for a in prior if a.symbol in active and self.is_fresh(a, now)]

        index = AlertIndex(survivors)
        new_alerts = [alert for alert in fresh if self.is_fresh(alert, now) and index.add(alert)]

        snapshot = sort_by_recency(index.values())
        self._cache.set(snapshot)

        logger.info(
            "Alert cache merged: prior=%d kept=%d fresh=%d added=%d total=%d",
            len(prior),
            len(survivors),
            len(fresh),
            len(new_alerts),
            len(snapshot),
        )
        return MergeResult(snapshot=snapshot, display=snapshot[: self._display_cap], new_alerts=new_alerts)

    @property
    def display_cap(self) -> int:
        return self._display_cap

    def load_snapshot(
        self,
        active_symbols: Iterable[str] | None = None,
        now: datetime | None = None,
    ) -> list[Alert]:
        """저장된 스냅샷 중 신선한 항목 (active_symbols 지정 시 해당 종목만). 저장하지 않음."""
        now = now or datetime.now(UTC)
        active = {s.upper() for s in active_symbols} if active_symbols is not None else None
        alerts = [a for a in self.load() if self.is_fresh(a, now) and (active is None or a.symbol in active)]
        return sort_by_recency(alerts)

    def load_display(self, now: datetime | None = None) -> list[Alert]:
        """초기 로드용 표시 목록 (신선도 필터 + 정렬 + 상한)."""
        return self.load_snapshot(now=now)[: self._display_cap]

    def clear(self) -> None:
        self._cache.delete()
