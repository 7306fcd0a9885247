"""FastAPI Depends 기반 DI - 서비스 공통 의존성 팩토리.

Usage:
    from newslens.services.deps import get_alert_cache

    @app.get("/alerts")
    def list_alerts(cache: AlertCache = Depends(get_alert_cache)):
        ...
"""

from functools import lru_cache

from newslens.domain.config import get_config
from newslens.infra.llm import LLMFactory
from newslens.infra.store import KeyValueStore, create_store
from newslens.services.advisor import LoggingNotificationSink, NotificationSink, PortfolioAdvisor, RetryPolicy
from newslens.services.news.alert_cache import AlertCache


@lru_cache
def get_store() -> KeyValueStore:
    """APP_STORE_BACKEND 에 맞는 저장소 (싱글턴)."""
    return create_store()


def get_alert_cache() -> AlertCache:
    return AlertCache(get_store())


@lru_cache
def get_advisor() -> PortfolioAdvisor:
    """LLM provider + 재시도 정책이 주입된 어드바이저 (싱글턴, 인사이트 해시 유지)."""
    return PortfolioAdvisor(LLMFactory.get_provider(), RetryPolicy.from_config())


@lru_cache
def get_notification_sink() -> NotificationSink:
    return LoggingNotificationSink()


def get_triage_advisor() -> PortfolioAdvisor | None:
    """새 알림 분류용 어드바이저. 비활성 또는 LLM API 키 없으면 None."""
    config = get_config()
    if not config.alert.triage_enabled:
        return None
    if not (config.secrets.openrouter_api_key or config.secrets.openai_api_key):
        return None
    return get_advisor()
