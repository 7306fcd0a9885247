"""포트폴리오 모델 - 보유 종목 스냅샷 + 헬스 스코어."""

from pydantic import BaseModel, Field

from .enums import HealthBand
from .types import HealthValue, Score, Symbol


class Holding(BaseModel):
    """보유 종목 (외부 포트폴리오 서브시스템 소유, 읽기 전용 입력)."""

    symbol: Symbol
    quantity: float = Field(ge=0)
    avg_price: float = Field(ge=0)
    current_value: float = 0.0  # 현재가 x 수량
    daily_change_percent: float = 0.0
    name: str | None = None  # 관련도 키워드용 (예: "Apple Inc")
    sector: str | None = None

    @property
    def invested(self) -> float:
        return self.avg_price * self.quantity


class PortfolioSnapshot(BaseModel):
    """스코어링 시점의 보유 종목 전체."""

    holdings: list[Holding] = []

    @property
    def symbols(self) -> list[str]:
        return [h.symbol for h in self.holdings]

    @property
    def total_invested(self) -> float:
        return sum(h.invested for h in self.holdings)

    @property
    def total_value(self) -> float:
        return sum(h.current_value for h in self.holdings)


class HealthScore(BaseModel):
    """포트폴리오 헬스 스코어 (저장하지 않음, 매번 재계산)."""

    score: HealthValue
    profitability: Score = 50.0  # 가중치 0.4
    diversification: Score = 0.0  # 가중치 0.3
    sentiment: Score = 50.0  # 가중치 0.3

    @property
    def band(self) -> HealthBand:
        if self.score > 75:
            return HealthBand.STABLE
        if self.score > 50:
            return HealthBand.MODERATE
        return HealthBand.HIGH_RISK
