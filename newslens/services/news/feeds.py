"""RSS 피드 레지스트리.

기본 갱신 대상은 FEED_SELECTED_IDS (인도 2 + 글로벌 2 + 크립토 1).
"""

from newslens.domain.config import FeedConfig, get_config
from newslens.domain.enums import FeedCategory
from newslens.domain.health import FeedRegistryHealth
from newslens.domain.news import FeedDescriptor

FEEDS: tuple[FeedDescriptor, ...] = (
    # India
    FeedDescriptor(
        id="et-market",
        name="Economic Times (Markets)",
        url="https://economictimes.indiatimes.com/markets/rssfeeds/1977021501.cms",
        category=FeedCategory.INDIA,
    ),
    FeedDescriptor(
        id="mint-top",
        name="LiveMint",
        url="https://www.livemint.com/rss/news",
        category=FeedCategory.INDIA,
    ),
    FeedDescriptor(
        id="moneycontrol",
        name="MoneyControl",
        url="https://www.moneycontrol.com/rss/latestnews.xml",
        category=FeedCategory.INDIA,
    ),
    # Global
    FeedDescriptor(
        id="cnbc-finance",
        name="CNBC Finance",
        url="https://search.cnbc.com/rs/search/combinedcms/view.xml?partnerId=wrss01&id=10000664",
        category=FeedCategory.GLOBAL,
    ),
    FeedDescriptor(
        id="wsj-markets",
        name="WSJ Markets",
        url="https://feeds.a.dj.com/rss/RSSMarketsMain.xml",
        category=FeedCategory.GLOBAL,
    ),
    FeedDescriptor(
        id="investing-com",
        name="Investing.com",
        url="https://www.investing.com/rss/news.rss",
        category=FeedCategory.GLOBAL,
    ),
    # Tech & Crypto
    FeedDescriptor(
        id="coindesk",
        name="CoinDesk",
        url="https://www.coindesk.com/arc/outboundfeeds/rss",
        category=FeedCategory.CRYPTO,
    ),
    FeedDescriptor(
        id="bitcoin-mag",
        name="Bitcoin Magazine",
        url="https://bitcoinmagazine.com/.rss/full/",
        category=FeedCategory.CRYPTO,
    ),
    FeedDescriptor(
        id="cryptoslate",
        name="CryptoSlate",
        url="https://cryptoslate.com/feed/",
        category=FeedCategory.CRYPTO,
    ),
    FeedDescriptor(
        id="techcrunch",
        name="TechCrunch",
        url="https://techcrunch.com/feed/",
        category=FeedCategory.TECH,
    ),
)

_BY_ID = {feed.id: feed for feed in FEEDS}


def get_feed(feed_id: str) -> FeedDescriptor | None:
    return _BY_ID.get(feed_id)


def feeds_by_category(category: FeedCategory | str) -> list[FeedDescriptor]:
    return [feed for feed in FEEDS if feed.category == category]


def selected_feeds(config: FeedConfig | None = None) -> list[FeedDescriptor]:
    """설정된 기본 갱신 대상. 모르는 id 는 무시."""
    config = config or get_config().feed
    return [_BY_ID[i] for i in config.get_selected_ids() if i in _BY_ID]


def feed_registry_health(config: FeedConfig | None = None) -> FeedRegistryHealth:
    """선택된 피드 id 의 레지스트리 해석 결과 (/health)."""
    config = config or get_config().feed
    ids = config.get_selected_ids()
    return FeedRegistryHealth(
        selected=[i for i in ids if i in _BY_ID],
        unknown=[i for i in ids if i not in _BY_ID],
        registered=len(FEEDS),
    )
