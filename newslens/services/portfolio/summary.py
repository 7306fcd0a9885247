"""전일 대비 포트폴리오 변동 요약 문구."""

from newslens.domain.portfolio import Holding


def daily_summary(holdings: list[Holding]) -> str | None:
    """평균 등락률 방향, 총 평가액 변동, 최대 상승/하락 종목.

    보유 종목이 없으면 None.
    """
    if not holdings:
        return None

    avg_change = sum(h.daily_change_percent for h in holdings) / len(holdings)
    value_shift = sum(h.current_value * h.daily_change_percent / 100 for h in holdings)
    gainer = max(holdings, key=lambda h: h.daily_change_percent)
    loser = min(holdings, key=lambda h: h.daily_change_percent)

    direction = "up" if avg_change >= 0 else "down"
    return (
        f"Since yesterday, your portfolio is {direction} {abs(avg_change):.1f}% "
        f"(${abs(value_shift):.2f}). "
        f"{gainer.symbol} is leading (+{gainer.daily_change_percent:.1f}%), "
        f"while {loser.symbol} lags ({loser.daily_change_percent:.1f}%)."
    )
