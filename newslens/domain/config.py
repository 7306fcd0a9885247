"""통합 설정 모델 - Pydantic Settings 기반.

모든 설정값은 환경 변수로 주입. 우선순위:
  1. 환경 변수 (docker-compose env, .env)
  2. Pydantic Settings 기본값
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class RedisConfig(BaseSettings):
    """Redis 설정 (알림 캐시 저장소)."""

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: str = ""
    connect_timeout: float = 5.0
    socket_timeout: float = 15.0

    model_config = {"env_prefix": "REDIS_"}

    @property
    def url(self) -> str:
        if self.password:
            return f"redis://:{self.password}@{self.host}:{self.port}/{self.db}"
        return f"redis://{self.host}:{self.port}/{self.db}"


class FeedConfig(BaseSettings):
    """RSS 피드 수집 설정."""

    request_timeout: float = 15.0
    max_items_per_feed: int = 5
    freshness_hours: int = 48
    future_skew_hours: int = 1  # 미래 시각 허용 한도 (피드 시계 오차)
    description_limit: int = 180
    # 기본 수집 대상 (콤마 구분 feed id)
    selected_ids: str = "et-market,mint-top,cnbc-finance,wsj-markets,coindesk"

    model_config = {"env_prefix": "FEED_"}

    def get_selected_ids(self) -> list[str]:
        return [s.strip() for s in self.selected_ids.split(",") if s.strip()]


class AlertConfig(BaseSettings):
    """알림 캐시/중복 제거 설정."""

    cache_key: str = "portfolio_news_cache"
    display_cap: int = 20
    freshness_hours: int = 48
    relevance_threshold: float = 0.3
    triage_enabled: bool = True  # 새 알림 AI 분류 (LLM API 키 있을 때만)

    model_config = {"env_prefix": "ALERT_"}


class LLMConfig(BaseSettings):
    """LLM 설정 (어드바이저/인사이트)."""

    provider: str = "openrouter"
    model: str = "google/gemini-2.0-flash-exp:free"
    base_url: str = "https://openrouter.ai/api/v1"
    temperature: float = 0.7
    max_tokens: int = 1000
    request_timeout: float = 20.0
    # 재시도 정책: 최초 1회 + 재시도 2회, 고정 1초 간격
    max_retries: int = 2
    retry_delay: float = 1.0
    retry_backoff: float = 1.0

    model_config = {"env_prefix": "LLM_"}


class ChatConfig(BaseSettings):
    """채팅 스트림 설정."""

    backend_url: str = "http://localhost:3000/api/chat"
    history_turns: int = 6
    session_id: str = "portfolio-chat"
    stream_timeout: float | None = None  # None = 무제한

    model_config = {"env_prefix": "CHAT_"}


class SecretsConfig(BaseSettings):
    """외부 서비스 API 키 - 환경변수 직접 매핑 (prefix 없음).

    env_prefix 없이 필드명이 곧 환경변수명:
        openrouter_api_key -> OPENROUTER_API_KEY
        openai_api_key     -> OPENAI_API_KEY
    """

    openrouter_api_key: str = ""
    openai_api_key: str = ""


class AppConfig(BaseSettings):
    """최상위 설정 - 서브 설정 객체를 조합.

    Usage:
        from newslens.domain.config import get_config
        config = get_config()
        print(config.redis.url)
        print(config.feed.get_selected_ids())
    """

    env: str = Field(default="production", description="development | staging | production")
    debug: bool = False
    log_level: str = "INFO"
    json_logs: bool = True
    store_backend: str = Field(default="redis", pattern=r"^(redis|memory)$")

    redis: RedisConfig = Field(default_factory=RedisConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)
    alert: AlertConfig = Field(default_factory=AlertConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    chat: ChatConfig = Field(default_factory=ChatConfig)
    secrets: SecretsConfig = Field(default_factory=SecretsConfig)

    model_config = {"env_prefix": "APP_"}


@lru_cache
def get_config() -> AppConfig:
    """싱글턴 설정 인스턴스.

    프로세스 내에서 한 번만 환경 변수를 읽고 캐싱.
    테스트에서는 get_config.cache_clear()로 초기화.
    """
    return AppConfig()
