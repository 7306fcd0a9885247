"""News Alerts 서비스 - 포트폴리오 뉴스 알림 + 헬스 스코어 + AI 어드바이스.

Data Flow:
  RSS Feeds -> FeedFetcher -> AlertScorer -> AlertCache (Redis) -> 표시 목록 + 헬스 스코어
"""

import logging
from contextlib import asynccontextmanager

from fastapi import BackgroundTasks, Depends, HTTPException
from pydantic import BaseModel

from newslens.domain.config import get_config
from newslens.domain.enums import HealthBand, HealthState
from newslens.domain.health import StoreHealth
from newslens.domain.news import Alert
from newslens.domain.portfolio import HealthScore, Holding
from newslens.infra.observability import setup_logging
from newslens.services.advisor import NotificationSink, PortfolioAdvisor
from newslens.services.base import create_app
from newslens.services.deps import get_advisor, get_alert_cache, get_notification_sink, get_triage_advisor
from newslens.services.portfolio.health import compute_health
from newslens.services.portfolio.summary import daily_summary

from .alert_cache import AlertCache
from .feeds import feed_registry_health
from .fetcher import FeedFetcher
from .pipeline import RefreshPipeline

logger = logging.getLogger(__name__)

# ─── State ──────────────────────────────────────────────

_state: dict = {"fetcher": None, "pipeline": None}


def get_pipeline() -> RefreshPipeline:
    pipeline = _state["pipeline"]
    if pipeline is None:
        raise HTTPException(status_code=503, detail="Refresh pipeline not initialized")
    return pipeline


# ─── FastAPI App ────────────────────────────────────────


@asynccontextmanager
async def lifespan(app):
    config = get_config()
    setup_logging("news-alerts", log_level=config.log_level, json_output=config.json_logs)

    fetcher = FeedFetcher()
    _state["fetcher"] = fetcher
    _state["pipeline"] = RefreshPipeline(fetcher, get_alert_cache())
    logger.info("Refresh pipeline ready (store=%s)", config.store_backend)

    yield

    _state["pipeline"] = None
    _state["fetcher"] = None
    await fetcher.aclose()


def store_health() -> StoreHealth:
    backend = get_config().store_backend
    try:
        cached = len(get_alert_cache().load())
    except Exception as e:
        logger.warning("Alert store unavailable: %s", e)
        return StoreHealth(backend=backend, status=HealthState.DOWN)
    return StoreHealth(backend=backend, cached_alerts=cached)


_deps = ["redis", "llm"] if get_config().store_backend == "redis" else ["llm"]
app = create_app(
    "news-alerts",
    version="1.0.0",
    lifespan=lifespan,
    dependencies=_deps,
    store_status=store_health,
    feed_status=feed_registry_health,
)


class PortfolioRequest(BaseModel):
    holdings: list[Holding] = []


class RefreshResponse(BaseModel):
    alerts: list[Alert]
    health: HealthScore
    band: HealthBand
    summary: str | None = None
    degraded: bool = False


class HealthScoreRequest(BaseModel):
    holdings: list[Holding] = []
    alerts: list[Alert] = []


class HealthScoreResponse(BaseModel):
    health: HealthScore
    band: HealthBand


class AdviceRequest(BaseModel):
    symbol: str
    title: str
    holdings: list[Holding] = []
    simple: bool = False
    style: str = "long_term"
    risk: str = "moderate"


class InsightRequest(BaseModel):
    holdings: list[Holding] = []
    simple: bool = False
    style: str = "long_term"
    risk: str = "moderate"


class AdviceResponse(BaseModel):
    content: str | None = None


@app.post("/refresh")
async def refresh(
    req: PortfolioRequest,
    background: BackgroundTasks,
    pipeline: RefreshPipeline = Depends(get_pipeline),
    triage: PortfolioAdvisor | None = Depends(get_triage_advisor),
    sink: NotificationSink = Depends(get_notification_sink),
) -> RefreshResponse:
    """피드 수집 -> 알림 병합 -> 헬스 스코어. 새 알림은 응답 후 AI 분류."""
    result = await pipeline.refresh(req.holdings)
    if triage is not None and result.new_alerts:
        background.add_task(triage.triage_alerts, result.new_alerts, sink)
    return RefreshResponse(
        alerts=result.alerts,
        health=result.health,
        band=result.health.band,
        summary=daily_summary(req.holdings),
        degraded=result.degraded,
    )


@app.get("/alerts")
def list_alerts(cache: AlertCache = Depends(get_alert_cache)) -> list[Alert]:
    """저장된 알림 (신선도 필터 + 최신순 상위 20건)."""
    return cache.load_display()


@app.post("/health-score")
def health_score(req: HealthScoreRequest) -> HealthScoreResponse:
    health = compute_health(req.holdings, req.alerts)
    return HealthScoreResponse(health=health, band=health.band)


@app.post("/advice")
async def advice(req: AdviceRequest, advisor: PortfolioAdvisor = Depends(get_advisor)) -> AdviceResponse:
    """뉴스 한 건의 포트폴리오 영향 분석. 재시도 소진 시 503."""
    content = await advisor.advise_on_news(
        req.symbol, req.title, req.holdings, simple=req.simple, style=req.style, risk=req.risk
    )
    return AdviceResponse(content=content)


@app.post("/insight")
async def insight(req: InsightRequest, advisor: PortfolioAdvisor = Depends(get_advisor)) -> AdviceResponse:
    """포트폴리오 한 줄 인사이트 (실패 시 고정 안내 문구)."""
    content = await advisor.portfolio_insight(req.holdings, simple=req.simple, style=req.style, risk=req.risk)
    return AdviceResponse(content=content)
