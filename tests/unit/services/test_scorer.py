"""Sentiment & Relevance Scorer 단위 테스트."""

from datetime import UTC, datetime

import pytest

from newslens.domain.enums import SentimentLabel
from newslens.domain.news import Article
from newslens.services.news.scorer import (
    MarketContext,
    extract_domain,
    keyword_overlap,
    keyword_set,
    market_relevance,
    mentions_keyword,
    sentiment_label,
    sentiment_score,
)


def _article(title: str = "", description: str = "", url: str = "https://example.com/x", **kw) -> Article:
    return Article(
        id="a-0-1",
        title=title,
        description=description,
        url=url,
        source="Test",
        published_at=datetime(2026, 3, 2, tzinfo=UTC),
        **kw,
    )


# ─── Sentiment ──────────────────────────────────────────


class TestSentimentScore:
    def test_neutral_text(self):
        assert sentiment_score("The committee met on Tuesday") == 0.0

    def test_positive_words(self):
        assert sentiment_score("Strong growth, record profit!") == pytest.approx(0.4)

    def test_negative_words(self):
        assert sentiment_score("Stocks FALL on weak outlook") == pytest.approx(-0.2)

    def test_whole_tokens_only(self):
        # "rising" / "cuts" 는 사전 단어와 정확히 일치하지 않음
        assert sentiment_score("rising cuts") == 0.0

    def test_clamped(self):
        assert sentiment_score(" ".join(["surge"] * 15)) == 1.0
        assert sentiment_score(" ".join(["plunge"] * 15)) == -1.0

    def test_empty(self):
        assert sentiment_score("") == 0.0


class TestSentimentLabel:
    @pytest.mark.parametrize(
        ("score", "label"),
        [
            (0.5, SentimentLabel.BULLISH),
            (0.11, SentimentLabel.BULLISH),
            (0.1, SentimentLabel.NEUTRAL),
            (0.0, SentimentLabel.NEUTRAL),
            (-0.1, SentimentLabel.NEUTRAL),
            (-0.2, SentimentLabel.BEARISH),
        ],
    )
    def test_hysteresis(self, score, label):
        assert sentiment_label(score) == label

    def test_custom_hysteresis(self):
        assert sentiment_label(0.2, hysteresis=0.3) == SentimentLabel.NEUTRAL


# ─── Relevance ──────────────────────────────────────────


class TestExtractDomain:
    def test_strips_www(self):
        assert extract_domain("https://www.Reuters.com/markets/x") == "reuters.com"

    def test_invalid(self):
        assert extract_domain("") == ""
        assert extract_domain("http://[::1") == ""


class TestKeywords:
    def test_keyword_set(self):
        article = _article(tickers=["NVDA"])
        market = MarketContext(symbol="AAPL", name="Apple Inc.", sector="Information Technology")
        assert keyword_set(article, market) == {"nvda", "aapl", "apple", "inc", "information", "technology"}

    def test_short_tokens_dropped(self):
        market = MarketContext(symbol="X", name="A B")
        assert keyword_set(_article(), market) == set()

    def test_overlap_ratio(self):
        article = _article(title="Apple unveils new iPhone", description="AAPL shares")
        market = MarketContext(symbol="AAPL", name="Apple Computer")
        assert keyword_overlap(article, market) == pytest.approx(2 / 3)

    def test_overlap_empty_keywords(self):
        assert keyword_overlap(_article(title="anything"), MarketContext(symbol="X")) == 0.0

    def test_mentions_keyword_whole_word_only(self):
        market = MarketContext(symbol="ETH", name="ethereum eth")
        assert keyword_overlap(_article(title="Something odd"), market) > 0
        assert mentions_keyword(_article(title="Something odd"), market) is False
        assert mentions_keyword(_article(title="ETH staking update"), market) is True


class TestMarketRelevance:
    def test_full_overlap_neutral(self):
        article = _article(title="AAPL update")
        market = MarketContext(symbol="AAPL")
        # overlap 1.0, alignment 1.0 (감성 0, 등락 0)
        assert market_relevance(article, market) == pytest.approx(0.95)

    def test_quality_source_boost(self):
        article = _article(title="AAPL update", url="https://www.reuters.com/aapl")
        assert market_relevance(article, MarketContext(symbol="AAPL")) == pytest.approx(1.0)

    def test_no_overlap_alignment_only(self):
        article = _article(title="Weather report")
        assert market_relevance(article, MarketContext(symbol="TSLA")) == pytest.approx(0.30)

    def test_sentiment_misalignment(self):
        # 감성 +0.2 vs 등락 -20% (-1.0) -> alignment = max(0, 1 - 1.2) = 0
        article = _article(title="TSLA surge, strong quarter")
        market = MarketContext(symbol="TSLA", change_percent=-35)
        assert market_relevance(article, market) == pytest.approx(0.65)

    @pytest.mark.parametrize("change", [-100, -20, -3.5, 0, 7, 20, 250])
    def test_always_in_range(self, change):
        article = _article(title="BTC bitcoin surge record gain", url="https://www.bloomberg.com/x", tickers=["BTC"])
        score = market_relevance(article, MarketContext(symbol="BTC", name="Bitcoin", change_percent=change))
        assert 0.0 <= score <= 1.0
