"""Mock RSS feed server (httpx.MockTransport)."""

from .app import FeedState, create_mock_transport

__all__ = ["FeedState", "create_mock_transport"]
