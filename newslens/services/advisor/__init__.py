"""AI advisor - retry policy, news advice, portfolio insight, alert triage."""

from .retry import RetryPolicy
from .service import INSIGHT_FALLBACK, PortfolioAdvisor
from .triage import LoggingNotificationSink, NotificationSink, parse_triage

__all__ = [
    "INSIGHT_FALLBACK",
    "LoggingNotificationSink",
    "NotificationSink",
    "PortfolioAdvisor",
    "RetryPolicy",
    "parse_triage",
]
