"""열거형 정의 - 시스템 전체에서 사용하는 상수값."""

from enum import StrEnum


class Sentiment(StrEnum):
    """알림 감성 (저장 단위)"""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class SentimentLabel(StrEnum):
    """점수 기반 시장 감성 라벨"""

    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"

    def to_sentiment(self) -> Sentiment:
        return {
            SentimentLabel.BULLISH: Sentiment.POSITIVE,
            SentimentLabel.BEARISH: Sentiment.NEGATIVE,
        }.get(self, Sentiment.NEUTRAL)


class FeedCategory(StrEnum):
    """피드 분류"""

    GLOBAL = "global"
    INDIA = "india"
    TECH = "tech"
    CRYPTO = "crypto"


class ChatRole(StrEnum):
    """채팅 메시지 역할"""

    USER = "user"
    ASSISTANT = "assistant"


class HealthBand(StrEnum):
    """헬스 스코어 구간"""

    STABLE = "Stable"  # > 75
    MODERATE = "Moderate"  # > 50
    HIGH_RISK = "High Risk"


class HealthState(StrEnum):
    """서비스/의존성 상태 (/health)"""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    DOWN = "down"  # 의존성 단위
    UNHEALTHY = "unhealthy"  # 서비스 단위 (의존성 하나라도 down)


class TriageType(StrEnum):
    """AI 알림 분류 (알림 발송 대상은 RISK / OPPORTUNITY)"""

    RISK = "RISK"
    OPPORTUNITY = "OPPORTUNITY"
    NONE = "NONE"
