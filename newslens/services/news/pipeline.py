"""Refresh Pipeline - 피드 수집 -> 알림 스코어링 -> 캐시 병합 -> 헬스 스코어.

AlertCache 의 read-merge-write 는 락이 없으므로 이 파이프라인이 직렬화한다:
  - 인스턴스 단위 asyncio.Lock
  - 스코어링 입력이 같은 동시 요청은 진행 중인 수집/병합 결과를 공유
  - 헬스 스코어는 공유하지 않고 호출자의 보유 종목으로 각각 계산

수집/스코어링 실패는 전파하지 않고 캐시된 스냅샷 + best-effort 헬스 스코어로 대체.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime

from newslens.domain.news import Alert
from newslens.domain.portfolio import HealthScore, Holding
from newslens.infra.observability import log_context
from newslens.services.portfolio.health import compute_health

from .alert_cache import AlertCache
from .alerts import AlertScorer
from .fetcher import FeedFetcher

logger = logging.getLogger(__name__)


@dataclass
class RefreshResult:
    alerts: list[Alert]
    health: HealthScore
    degraded: bool = False
    new_alerts: list[Alert] = field(default_factory=list)


@dataclass
class _Cycle:
    """동시 요청 간 공유되는 갱신 결과 (수량/평가액과 무관한 부분만)."""

    snapshot: list[Alert]
    display: list[Alert]
    new_alerts: list[Alert] = field(default_factory=list)
    degraded: bool = False


def refresh_key(holdings: list[Holding]) -> str:
    """동시 갱신 병합 키.

    알림 스코어링 입력 (종목, 종목명, 섹터, 일간 등락률) 만 포함한다.
    수량/평단/평가액은 헬스 스코어에만 쓰이므로 키에서 제외.
    """
    parts = {f"{h.symbol}|{h.name or ''}|{h.sector or ''}|{h.daily_change_percent:g}" for h in holdings}
    return ",".join(sorted(parts))


class RefreshPipeline:
    """포트폴리오 뉴스 갱신 주기.

    Args:
        fetcher: FeedFetcher
        cache: AlertCache
        scorer: AlertScorer (기본: 설정 임계값)
    """

    def __init__(self, fetcher: FeedFetcher, cache: AlertCache, scorer: AlertScorer | None = None):
        self._fetcher = fetcher
        self._cache = cache
        self._scorer = scorer or AlertScorer()
        self._lock = asyncio.Lock()
        self._inflight: dict[str, asyncio.Task[_Cycle]] = {}

    async def refresh(self, holdings: list[Holding], *, now: datetime | None = None) -> RefreshResult:
        if not holdings:
            return RefreshResult(alerts=[], health=compute_health([], []))

        key = refresh_key(holdings)
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.create_task(self._run(holdings, now))
            self._inflight[key] = task
            task.add_done_callback(lambda _: self._inflight.pop(key, None))
        else:
            logger.debug("Refresh already in flight for [%s], joining", key)

        cycle = await asyncio.shield(task)
        return RefreshResult(
            alerts=cycle.display,
            health=compute_health(holdings, cycle.snapshot),
            degraded=cycle.degraded,
            new_alerts=cycle.new_alerts,
        )

    async def _run(self, holdings: list[Holding], now: datetime | None) -> _Cycle:
        symbols = sorted({h.symbol for h in holdings})
        with log_context(refresh=",".join(symbols), holdings=len(holdings)):
            async with self._lock:
                try:
                    articles = await self._fetcher.fetch_all(now=now)
                    fresh = self._scorer.score(articles, holdings)
                    merged = self._cache.merge(symbols, fresh, now=now)
                except Exception:
                    logger.exception("Refresh failed for [%s], serving cached alerts", ",".join(symbols))
                    return self._degraded(symbols, now)

            logger.info(
                "Refresh done: %d fresh alerts, %d new, %d displayed",
                len(fresh),
                merged.added,
                len(merged.display),
            )
            return _Cycle(snapshot=merged.snapshot, display=merged.display, new_alerts=merged.new_alerts)

    def _degraded(self, symbols: list[str], now: datetime | None) -> _Cycle:
        try:
            snapshot = self._cache.load_snapshot(symbols, now)
        except Exception as e:
            logger.warning("Cached alerts unavailable: %s", e)
            snapshot = []
        return _Cycle(snapshot=snapshot, display=snapshot[: self._cache.display_cap], degraded=True)
