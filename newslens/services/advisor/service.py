"""Portfolio Advisor - 뉴스 영향 분석 + 포트폴리오 한 줄 인사이트 + 새 알림 분류.

LLM 호출은 RetryPolicy 로 감싸고, 인사이트는 (종목 목록, 모드) 해시가 같으면 재생성하지 않는다.
"""

import logging

from newslens.domain.news import Alert, AlertTriage
from newslens.domain.portfolio import Holding
from newslens.exceptions import AdvisorBusyError, MalformedResponseError
from newslens.infra.llm.base import BaseLLMProvider

from .retry import RetryPolicy
from .triage import TRIAGE_SYSTEM, NotificationSink, parse_triage, triage_prompt

logger = logging.getLogger(__name__)

INSIGHT_FALLBACK = "Portfolio summary active. Check assets for live details."

ADVISOR_SYSTEM = "Elite portfolio analyst. Focus on portfolio impact and capital preservation."
INSIGHT_SYSTEM = "Finance AI. Risk focus."


def persona(style: str = "long_term", risk: str = "moderate") -> str:
    return f"Style: {style}, Risk: {risk}"


def insight_hash(holdings: list[Holding], simple: bool, style: str) -> str:
    symbols = ",".join(sorted(h.symbol for h in holdings))
    return f"{symbols}-{simple}-{style}"


class PortfolioAdvisor:
    """뉴스/포트폴리오 AI 어드바이저.

    Args:
        llm: LLM provider
        policy: 재시도 정책 (기본: LLM_ 설정)
    """

    def __init__(self, llm: BaseLLMProvider, policy: RetryPolicy | None = None):
        self._llm = llm
        self._policy = policy or RetryPolicy.from_config()
        self._last_insight_hash: str | None = None
        self._last_insight: str | None = None

    async def _complete(self, prompt: str, system: str) -> str:
        async def attempt() -> str:
            response = await self._llm.generate(prompt, system=system)
            content = response.content.strip()
            if not content:
                raise MalformedResponseError(f"{self._llm.provider_name}: empty completion")
            return content

        return await self._policy.run(attempt)

    async def advise_on_news(
        self,
        symbol: str,
        title: str,
        holdings: list[Holding],
        *,
        simple: bool = False,
        style: str = "long_term",
        risk: str = "moderate",
    ) -> str:
        """뉴스 한 건이 보유 포지션에 미치는 영향. 재시도 소진 시 AdvisorBusyError."""
        symbol = symbol.upper()
        asset = next((h for h in holdings if h.symbol == symbol), None)
        total = sum(h.current_value for h in holdings)
        asset_value = asset.current_value if asset else 0.0
        weight = asset_value / total * 100 if total > 0 else 0.0

        prompt = (
            f"Analyze news for {symbol}. Headline: {title}.\n"
            f"Context: This asset makes up {weight:.1f}% of the user's total portfolio "
            f"(${asset_value:.0f} of ${total:.0f}).\n"
            f"Persona: {persona(style, risk)}. Position: {asset.quantity if asset else 0:g} units.\n"
            "Explain specifically how this news affects the user's portfolio and net worth. "
            "Suggest strategy context.\n"
            f"Confidence score 0.0-1.0. {'Simple terminology.' if simple else 'Professional terminology.'}"
        )
        return await self._complete(prompt, ADVISOR_SYSTEM)

    async def portfolio_insight(
        self,
        holdings: list[Holding],
        *,
        simple: bool = False,
        style: str = "long_term",
        risk: str = "moderate",
    ) -> str | None:
        """포트폴리오 한 줄 인사이트.

        보유 종목 없으면 None. 직전과 같은 해시면 이전 결과 재사용.
        실패 시 고정 안내 문구 (해시 미갱신 -> 다음 호출에서 재시도).
        """
        if not holdings:
            return None

        current = insight_hash(holdings, simple, style)
        if current == self._last_insight_hash and self._last_insight is not None:
            logger.debug("Insight unchanged (hash=%s), skipping", current)
            return self._last_insight

        total = sum(h.current_value for h in holdings)
        prompt = (
            f"Portfolio: {len(holdings)} assets. Tot Val ${total:.0f}. "
            f"Persona: {persona(style, risk)}. 1-sentence insight. Confidence needed. "
            f"{'Simple.' if simple else 'Pro.'}"
        )
        try:
            content = await self._complete(prompt, INSIGHT_SYSTEM)
        except AdvisorBusyError:
            logger.warning("Portfolio insight unavailable, using fallback")
            return INSIGHT_FALLBACK

        self._last_insight_hash = current
        self._last_insight = content
        return content

    async def triage_alerts(self, alerts: list[Alert], sink: NotificationSink | None = None) -> list[AlertTriage]:
        """알림별 RISK / OPPORTUNITY 분류. 발송 대상만 반환하고 sink 로 전달.

        알림 단위로 실패 격리: 재시도 소진된 알림은 건너뛴다.
        """
        actionable: list[AlertTriage] = []
        for alert in alerts:
            try:
                text = await self._complete(triage_prompt(alert), TRIAGE_SYSTEM)
            except AdvisorBusyError:
                logger.warning("[%s] Triage skipped: %s", alert.symbol, alert.title)
                continue

            triage = parse_triage(text, alert)
            if not triage.actionable:
                continue
            actionable.append(triage)
            if sink is not None:
                await sink.notify(triage)

        logger.info("Triaged %d alerts -> %d actionable", len(alerts), len(actionable))
        return actionable
