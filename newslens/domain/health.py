"""서비스 헬스 모델 (/health 응답) - 의존성 + 알림 저장소 + 피드 레지스트리 상태."""

from datetime import datetime

from pydantic import BaseModel

from .enums import HealthState


class DependencyHealth(BaseModel):
    """외부 의존성 (redis, llm) 단건 체크 결과."""

    status: HealthState
    latency_ms: float | None = None
    message: str | None = None


class FeedRegistryHealth(BaseModel):
    """FEED_SELECTED_IDS 가 레지스트리에서 얼마나 해석되는지."""

    selected: list[str] = []
    unknown: list[str] = []  # 레지스트리에 없는 id (무시됨)
    registered: int = 0

    @property
    def status(self) -> HealthState:
        if not self.selected:
            return HealthState.DOWN
        return HealthState.DEGRADED if self.unknown else HealthState.HEALTHY


class StoreHealth(BaseModel):
    """알림 스냅샷 저장소 상태."""

    backend: str  # "redis" | "memory"
    cached_alerts: int | None = None  # 저장된 스냅샷 건수 (조회 실패 시 None)
    status: HealthState = HealthState.HEALTHY


class ServiceHealth(BaseModel):
    service: str
    status: HealthState
    uptime_seconds: float
    version: str = "1.0.0"
    store: StoreHealth | None = None
    feeds: FeedRegistryHealth | None = None
    dependencies: dict[str, DependencyHealth] = {}
    timestamp: datetime

    @staticmethod
    def rollup(states: list[HealthState]) -> HealthState:
        """하나라도 down 이면 unhealthy, degraded 가 있으면 degraded."""
        if HealthState.DOWN in states:
            return HealthState.UNHEALTHY
        if HealthState.DEGRADED in states:
            return HealthState.DEGRADED
        return HealthState.HEALTHY
