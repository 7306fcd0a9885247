"""Article x Holding -> Alert 변환.

관련도가 임계값(기본 0.3)을 넘고 종목 키워드가 본문에 단어로 등장한 경우만 알림 생성.
관련도의 overlap 비율은 부분 문자열 매칭이지만, 알림 게이트는 단어 단위로 판단한다.
"""

import logging

from newslens.domain.config import get_config
from newslens.domain.news import Alert, Article
from newslens.domain.portfolio import Holding

from .scorer import MarketContext, market_relevance, mentions_keyword, sentiment_label, sentiment_score

logger = logging.getLogger(__name__)

# 종목명 미지정 시 사용하는 대표 키워드
SYMBOL_ALIASES: dict[str, list[str]] = {
    "AAPL": ["apple", "iphone", "ipad", "mac"],
    "GOOGL": ["google", "alphabet", "android"],
    "MSFT": ["microsoft", "windows", "azure"],
    "TSLA": ["tesla", "elon musk", "electric vehicle"],
    "AMZN": ["amazon", "aws", "bezos"],
    "NVDA": ["nvidia", "gpu", "ai chip"],
    "META": ["meta", "facebook", "instagram", "whatsapp"],
    "NFLX": ["netflix", "streaming"],
    "BTC": ["bitcoin", "btc"],
    "ETH": ["ethereum", "eth"],
}


def market_context(holding: Holding) -> MarketContext:
    name = holding.name or " ".join(SYMBOL_ALIASES.get(holding.symbol, []))
    return MarketContext(
        symbol=holding.symbol,
        name=name or None,
        sector=holding.sector,
        change_percent=holding.daily_change_percent,
    )


class AlertScorer:
    """기사 목록을 보유 종목별 알림으로 변환.

    Args:
        threshold: 관련도 임계값 (초과 시 알림, 기본 ALERT_RELEVANCE_THRESHOLD)
    """

    def __init__(self, threshold: float | None = None):
        self._threshold = get_config().alert.relevance_threshold if threshold is None else threshold

    def score(self, articles: list[Article], holdings: list[Holding]) -> list[Alert]:
        contexts = [market_context(h) for h in holdings]
        alerts: list[Alert] = []

        for article in articles:
            sentiment = sentiment_label(sentiment_score(f"{article.title} {article.description}")).to_sentiment()
            for market in contexts:
                if not mentions_keyword(article, market):
                    continue
                relevance = market_relevance(article, market)
                if relevance <= self._threshold:
                    continue
                alerts.append(
                    Alert(
                        id=f"{market.symbol}-{article.id}",
                        symbol=market.symbol,
                        title=article.title,
                        description=article.description,
                        url=article.url,
                        sentiment=sentiment,
                        timestamp=article.published_at,
                        relevance_score=relevance,
                    )
                )

        alerts.sort(key=lambda a: (a.timestamp, a.relevance_score), reverse=True)
        logger.info("Scored %d articles x %d holdings -> %d alerts", len(articles), len(holdings), len(alerts))
        return alerts
