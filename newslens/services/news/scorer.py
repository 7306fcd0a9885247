"""Sentiment & Relevance Scorer - 키워드 기반 휴리스틱.

NLP 모델이 아닌 고정 단어 사전 기반. 출력은 항상 범위 내로 clamp:
  sentiment_score -> [-1, 1]
  market_relevance -> [0, 1]
"""

import re
from dataclasses import dataclass
from urllib.parse import urlparse

from newslens.domain.enums import SentimentLabel
from newslens.domain.news import Article

POSITIVE_WORDS = frozenset(
    [
        "good",
        "great",
        "excellent",
        "amazing",
        "wonderful",
        "fantastic",
        "positive",
        "success",
        "growth",
        "increase",
        "profit",
        "gain",
        "rise",
        "bull",
        "bullish",
        "optimistic",
        "confident",
        "strong",
        "beat",
        "outperform",
        "upgrade",
        "surge",
        "record",
    ]
)

NEGATIVE_WORDS = frozenset(
    [
        "bad",
        "terrible",
        "awful",
        "horrible",
        "negative",
        "loss",
        "decrease",
        "decline",
        "fall",
        "drop",
        "bear",
        "bearish",
        "pessimistic",
        "weak",
        "crisis",
        "problem",
        "concern",
        "worry",
        "miss",
        "downgrade",
        "plunge",
        "cut",
    ]
)

# 신뢰도 높은 출처 (+0.05 가산)
QUALITY_SOURCES = frozenset(
    [
        "bloomberg.com",
        "wsj.com",
        "ft.com",
        "reuters.com",
        "cnbc.com",
        "economist.com",
        "nytimes.com",
    ]
)

# 점수 정규화 기준 토큰 수
FULL_MAGNITUDE_TOKENS = 10

OVERLAP_WEIGHT = 0.65
ALIGNMENT_WEIGHT = 0.30
QUALITY_BOOST = 0.05
MAX_CHANGE_PERCENT = 20.0

_TOKEN_RE = re.compile(r"\W+")


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def tokenize(text: str) -> list[str]:
    """비단어 경계로 분리 + 소문자화. 빈 토큰 제외."""
    return [t for t in _TOKEN_RE.split(text.lower()) if t]


def sentiment_score(text: str) -> float:
    """긍정 단어 +1, 부정 단어 -1 합산 후 /10, [-1, 1] clamp."""
    total = 0
    for token in tokenize(text or ""):
        if token in POSITIVE_WORDS:
            total += 1
        elif token in NEGATIVE_WORDS:
            total -= 1
    return clamp(total / FULL_MAGNITUDE_TOKENS, -1.0, 1.0)


def sentiment_label(score: float, hysteresis: float = 0.1) -> SentimentLabel:
    if score > hysteresis:
        return SentimentLabel.BULLISH
    if score < -hysteresis:
        return SentimentLabel.BEARISH
    return SentimentLabel.NEUTRAL


def extract_domain(url: str) -> str:
    """URL 호스트 (소문자, 선행 www. 제거). 파싱 불가 시 빈 문자열."""
    try:
        host = urlparse(url or "").hostname or ""
    except ValueError:
        return ""
    return host.removeprefix("www.")


@dataclass(frozen=True)
class MarketContext:
    """관련도 계산 대상 종목 정보."""

    symbol: str
    name: str | None = None
    sector: str | None = None
    change_percent: float = 0.0


def keyword_set(article: Article, market: MarketContext) -> set[str]:
    """티커 태그 + 심볼 + 종목명 + 섹터 단어. 2자 미만 토큰 제외."""
    sources = [*article.tickers, market.symbol, market.name or "", market.sector or ""]
    keywords: set[str] = set()
    for source in sources:
        keywords.update(t for t in tokenize(source) if len(t) >= 2)
    return keywords


def article_text(article: Article) -> str:
    return f"{article.title} {article.description} {article.content}".lower()


def mentions_keyword(article: Article, market: MarketContext) -> bool:
    """키워드가 본문에 단어 단위로 하나라도 등장하는지 ("eth" 는 "something" 에 매칭되지 않음)."""
    return not keyword_set(article, market).isdisjoint(tokenize(article_text(article)))


def keyword_overlap(article: Article, market: MarketContext) -> float:
    """기사 본문에 substring 으로 등장하는 키워드 비율. 키워드 없으면 0."""
    keywords = keyword_set(article, market)
    if not keywords:
        return 0.0
    text = article_text(article)
    hits = sum(1 for k in keywords if k in text)
    return hits / len(keywords)


def market_relevance(article: Article, market: MarketContext) -> float:
    """기사-종목 관련도 [0, 1].

    0.65 * 키워드 overlap + 0.30 * 감성/등락 정합도 + 품질 출처 보너스.
    """
    overlap = keyword_overlap(article, market)

    change = clamp(market.change_percent, -MAX_CHANGE_PERCENT, MAX_CHANGE_PERCENT) / MAX_CHANGE_PERCENT
    alignment = clamp(1 - abs(sentiment_score(article_text(article)) - change), 0.0, 1.0)

    boost = QUALITY_BOOST if extract_domain(article.url) in QUALITY_SOURCES else 0.0

    return clamp(OVERLAP_WEIGHT * overlap + ALIGNMENT_WEIGHT * alignment + boost, 0.0, 1.0)
