"""Alert Triage - 새 알림을 AI 로 RISK / OPPORTUNITY / NONE 분류 후 알림 발송.

응답 형식 (한 줄에 한 필드, 대소문자 무관):
    SENTIMENT: Positive | Neutral | Negative
    TYPE: RISK | OPPORTUNITY | NONE
    EXPLANATION: ...
    SUGGESTION: ...

필드가 없거나 값이 이상하면 Neutral / NONE / 빈 문자열로 처리 (예외 없음).
발송 채널은 NotificationSink 로 주입 (기본: 로그만 남김).
"""

import logging
import re
from abc import ABC, abstractmethod

from newslens.domain.enums import Sentiment, TriageType
from newslens.domain.news import Alert, AlertTriage

logger = logging.getLogger(__name__)

TRIAGE_SYSTEM = "You are an expert financial analyst. Analyze sentiment and impact on assets."

_FIELD_RE = {
    name: re.compile(rf"^[\s*#-]*{name}[\s*]*:\s*(.*)$", re.IGNORECASE | re.MULTILINE)
    for name in ("SENTIMENT", "TYPE", "EXPLANATION", "SUGGESTION")
}


def triage_prompt(alert: Alert) -> str:
    news = f"{alert.title}. {alert.description}".strip()
    return (
        f"Analyze this news for {alert.symbol}.\n"
        f'News: "{news}"\n\n'
        "Output exactly in this format:\n"
        "SENTIMENT: {Positive/Neutral/Negative}\n"
        "TYPE: {RISK/OPPORTUNITY/NONE}\n"
        "EXPLANATION: {Brief impact summary}\n"
        "SUGGESTION: {Actionable advice}\n\n"
        "Rules:\n"
        "- Mark as RISK only if High Risk/Crash/Loss likely.\n"
        "- Mark as OPPORTUNITY only if High Growth/Surge/Profit likely.\n"
        "- Otherwise Mark TYPE as NONE."
    )


def _field(text: str, name: str) -> str:
    m = _FIELD_RE[name].search(text)
    return m.group(1).strip().strip("*{}[] ").strip() if m else ""


def parse_triage(text: str, alert: Alert) -> AlertTriage:
    """AI 응답 텍스트 -> AlertTriage."""
    sentiment_raw = _field(text, "SENTIMENT").lower()
    type_raw = _field(text, "TYPE").upper()

    try:
        sentiment = Sentiment(sentiment_raw)
    except ValueError:
        sentiment = Sentiment.NEUTRAL
    try:
        triage_type = TriageType(type_raw)
    except ValueError:
        triage_type = TriageType.NONE

    return AlertTriage(
        symbol=alert.symbol,
        title=alert.title,
        sentiment=sentiment,
        type=triage_type,
        explanation=_field(text, "EXPLANATION"),
        suggestion=_field(text, "SUGGESTION"),
    )


class NotificationSink(ABC):
    """RISK / OPPORTUNITY 분류 결과 수신자 (메일, 메신저 등)."""

    @abstractmethod
    async def notify(self, triage: AlertTriage) -> None: ...


class LoggingNotificationSink(NotificationSink):
    async def notify(self, triage: AlertTriage) -> None:
        logger.warning(
            "[%s] %s alert (%s): %s | %s",
            triage.symbol,
            triage.type,
            triage.sentiment,
            triage.explanation,
            triage.suggestion,
        )
