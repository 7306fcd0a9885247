"""Health Score Engine - 수익성 40% + 분산도 30% + 뉴스 감성 30%.

순수 함수. 보유 종목이 없으면 100 (평가할 리스크 없음).
"""

from newslens.domain.enums import Sentiment
from newslens.domain.news import Alert
from newslens.domain.portfolio import HealthScore, Holding, PortfolioSnapshot

PROFITABILITY_WEIGHT = 0.4
DIVERSIFICATION_WEIGHT = 0.3
SENTIMENT_WEIGHT = 0.3

POINTS_PER_SYMBOL = 20
CONCENTRATION_LIMIT = 35.0  # 단일 종목 비중 한도 (%)
CONCENTRATION_PENALTY = 20


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def profitability_score(holdings: list[Holding]) -> float:
    """중립 50 기준, 총 수익률 1%p 당 ±2점."""
    snapshot = PortfolioSnapshot(holdings=holdings)
    invested = snapshot.total_invested
    value = snapshot.total_value
    pl_percent = (value - invested) / invested * 100 if invested > 0 else 0.0
    return _clamp(50 + pl_percent * 2)


def diversification_score(holdings: list[Holding]) -> float:
    """종목당 20점 (5종목 = 100). 2종목 이상에서 비중 35% 초과 종목 있으면 -20."""
    snapshot = PortfolioSnapshot(holdings=holdings)
    unique = len(set(snapshot.symbols))
    score = min(unique * POINTS_PER_SYMBOL, 100)

    if unique > 1:
        total = snapshot.total_value or 1
        max_weight = max(h.current_value / total * 100 for h in holdings)
        if max_weight > CONCENTRATION_LIMIT:
            score -= CONCENTRATION_PENALTY

    return _clamp(score)


def sentiment_subscore(alerts: list[Alert]) -> float:
    """알림 없으면 50, 있으면 50 + 50 * (긍정 - 부정) / 전체."""
    if not alerts:
        return 50.0
    positive = sum(1 for a in alerts if a.sentiment == Sentiment.POSITIVE)
    negative = sum(1 for a in alerts if a.sentiment == Sentiment.NEGATIVE)
    return _clamp(50 + (positive - negative) / len(alerts) * 50)


def compute_health(holdings: list[Holding], alerts: list[Alert]) -> HealthScore:
    if not holdings:
        return HealthScore(score=100)

    profitability = profitability_score(holdings)
    diversification = diversification_score(holdings)
    sentiment = sentiment_subscore(alerts)

    composite = (
        PROFITABILITY_WEIGHT * profitability
        + DIVERSIFICATION_WEIGHT * diversification
        + SENTIMENT_WEIGHT * sentiment
    )
    return HealthScore(
        score=int(_clamp(round(composite))),
        profitability=profitability,
        diversification=diversification,
        sentiment=sentiment,
    )


def health_score(holdings: list[Holding], alerts: list[Alert]) -> int:
    return compute_health(holdings, alerts).score
