"""뉴스 피드, 기사, 포트폴리오 알림 모델."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator

from .enums import FeedCategory, Sentiment, TriageType
from .types import Relevance, Symbol


class FeedDescriptor(BaseModel):
    """수집 대상 RSS 피드."""

    id: str
    name: str  # 표시용 이름 (Article.source)
    url: str
    category: FeedCategory = FeedCategory.GLOBAL


class Article(BaseModel):
    """피드에서 파싱된 기사 (수집 주기마다 생성, 알림 변환 후 폐기)."""

    id: str  # "{feed_id}-{index}-{epoch_ms}"
    title: str
    description: str = ""  # 정규화 + 180자 제한
    content: str = ""  # content:encoded 우선, 없으면 원본 description
    url: str = ""
    source: str
    published_at: datetime
    sentiment: Sentiment = Sentiment.NEUTRAL
    market_relevance: float = 5  # 스코어링 전 placeholder
    tickers: list[str] = []

    @field_validator("published_at")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        return v if v.tzinfo else v.replace(tzinfo=UTC)


class Alert(BaseModel):
    """포트폴리오 종목에 매칭된 뉴스 알림 (캐시 저장 단위).

    중복 판단 키는 (symbol, title) - id 아님.
    직렬화 시 camelCase alias 사용 (relevanceScore).
    """

    model_config = {"populate_by_name": True}

    id: str
    symbol: Symbol
    title: str
    description: str = ""
    url: str = ""
    sentiment: Sentiment = Sentiment.NEUTRAL
    timestamp: datetime  # 기사 발행 시각
    relevance_score: Relevance = Field(default=0.0, alias="relevanceScore")

    @field_validator("timestamp")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        return v if v.tzinfo else v.replace(tzinfo=UTC)

    @field_validator("relevance_score", mode="before")
    @classmethod
    def clamp_relevance(cls, v: float) -> float:
        return min(max(float(v), 0.0), 1.0)

    @property
    def dedup_key(self) -> str:
        return f"{self.symbol}-{self.title}"


class AlertTriage(BaseModel):
    """알림 한 건에 대한 AI 분류 결과 (RISK / OPPORTUNITY 면 알림 발송)."""

    symbol: Symbol
    title: str
    sentiment: Sentiment = Sentiment.NEUTRAL
    type: TriageType = TriageType.NONE
    explanation: str = ""
    suggestion: str = ""

    @property
    def actionable(self) -> bool:
        return self.type != TriageType.NONE
