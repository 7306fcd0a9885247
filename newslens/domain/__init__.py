"""newslens 도메인 모델 - 서비스 간 데이터 계약의 Single Source of Truth.

Usage:
    from newslens.domain import Alert, Holding, Sentiment
    from newslens.domain.config import AppConfig
"""

# --- Types ---
from .types import HealthValue, Relevance, Score, Symbol

# --- Enums ---
from .enums import ChatRole, FeedCategory, HealthBand, HealthState, Sentiment, SentimentLabel, TriageType

# --- News ---
from .news import Alert, AlertTriage, Article, FeedDescriptor

# --- Portfolio ---
from .portfolio import HealthScore, Holding, PortfolioSnapshot

# --- Chat ---
from .chat import ChatMessage, ChatRequest, HistoryTurn, StreamRecord

# --- Health ---
from .health import DependencyHealth, FeedRegistryHealth, ServiceHealth, StoreHealth

__all__ = [
    # Types
    "Symbol",
    "Relevance",
    "Score",
    "HealthValue",
    # Enums
    "Sentiment",
    "SentimentLabel",
    "FeedCategory",
    "ChatRole",
    "HealthBand",
    "HealthState",
    "TriageType",
    # News
    "FeedDescriptor",
    "Article",
    "Alert",
    "AlertTriage",
    # Portfolio
    "Holding",
    "PortfolioSnapshot",
    "HealthScore",
    # Chat
    "ChatMessage",
    "ChatRequest",
    "HistoryTurn",
    "StreamRecord",
    # Health
    "DependencyHealth",
    "FeedRegistryHealth",
    "StoreHealth",
    "ServiceHealth",
]
