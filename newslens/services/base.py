"""FastAPI 앱 팩토리 - 서비스 공통 헬스체크 + 에러 핸들러.

Usage:
    from newslens.services.base import create_app

    app = create_app("news-alerts", version="1.0.0", dependencies=["redis"])
"""

import logging
import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from newslens.domain.enums import HealthState
from newslens.domain.health import DependencyHealth, FeedRegistryHealth, ServiceHealth, StoreHealth
from newslens.exceptions import AdvisorBusyError

logger = logging.getLogger(__name__)

# 서비스 시작 시각 (uptime 계산용)
_start_time: float = 0.0


def create_app(
    service_name: str,
    *,
    version: str = "1.0.0",
    lifespan: Callable | None = None,
    dependencies: list[str] | None = None,
    store_status: Callable[[], StoreHealth] | None = None,
    feed_status: Callable[[], FeedRegistryHealth] | None = None,
) -> FastAPI:
    """FastAPI 앱 팩토리 - 공통 헬스체크 + 에러 핸들러.

    Args:
        service_name: 서비스 식별자 (예: "news-alerts")
        version: 서비스 버전
        lifespan: 커스텀 lifespan context manager (startup/shutdown)
        dependencies: 헬스체크에 포함할 의존성 목록 ("redis", "llm")
        store_status: 알림 저장소 상태 조회 (/health 의 store 필드)
        feed_status: 피드 레지스트리 상태 조회 (/health 의 feeds 필드)
    """
    deps = dependencies or []

    @asynccontextmanager
    async def wrapped_lifespan(app: FastAPI) -> AsyncIterator[None]:
        global _start_time
        _start_time = time.monotonic()
        logger.info("[%s] Starting v%s", service_name, version)
        if lifespan:
            async with lifespan(app):
                yield
        else:
            yield
        logger.info("[%s] Shutting down", service_name)

    app = FastAPI(
        title=f"newslens {service_name}",
        version=version,
        lifespan=wrapped_lifespan,
    )

    # --- Error Handlers ---

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": exc.errors(include_url=False), "message": "Validation error"},
        )

    @app.exception_handler(AdvisorBusyError)
    async def advisor_busy_handler(request: Request, exc: AdvisorBusyError) -> JSONResponse:
        return JSONResponse(status_code=503, content={"detail": str(exc), "message": "Service busy"})

    @app.exception_handler(httpx.HTTPStatusError)
    async def http_status_error_handler(request: Request, exc: httpx.HTTPStatusError) -> JSONResponse:
        return JSONResponse(
            status_code=502,
            content={
                "detail": str(exc),
                "message": f"Upstream error: {exc.response.status_code}",
            },
        )

    # --- Health Check ---

    @app.get("/health")
    async def health() -> ServiceHealth:
        dep_health = {dep: _check_dependency(dep) for dep in deps}
        states = [d.status for d in dep_health.values()]

        store = _safe_status(store_status, "store")
        feeds = _safe_status(feed_status, "feeds")
        if store is not None:
            states.append(store.status)
        if feeds is not None:
            states.append(feeds.status)

        return ServiceHealth(
            service=service_name,
            status=ServiceHealth.rollup(states),
            uptime_seconds=time.monotonic() - _start_time,
            version=version,
            store=store,
            feeds=feeds,
            dependencies=dep_health,
            timestamp=datetime.now(UTC),
        )

    return app


def _safe_status(check: Callable | None, name: str):
    if check is None:
        return None
    try:
        return check()
    except Exception as e:
        logger.warning("Health check '%s' failed: %s", name, e)
        return None


def _check_dependency(name: str) -> DependencyHealth:
    """의존성 상태 체크."""
    start = time.monotonic()
    try:
        if name == "redis":
            from newslens.infra.store import get_redis

            get_redis().ping()
        elif name == "llm":
            from newslens.domain.config import get_config

            config = get_config()
            key = config.secrets.openrouter_api_key or config.secrets.openai_api_key
            if not key:
                return DependencyHealth(status=HealthState.DEGRADED, message="No LLM API key configured")
        else:
            return DependencyHealth(status=HealthState.HEALTHY, message=f"Unknown dep: {name}")

        latency = (time.monotonic() - start) * 1000
        status = HealthState.HEALTHY if latency < 1000 else HealthState.DEGRADED
        return DependencyHealth(status=status, latency_ms=round(latency, 1))

    except Exception as e:
        latency = (time.monotonic() - start) * 1000
        return DependencyHealth(
            status=HealthState.DOWN,
            latency_ms=round(latency, 1),
            message=str(e)[:200],
        )
