"""Observability infrastructure - logging."""

from .logging import log_context, setup_logging

__all__ = ["log_context", "setup_logging"]
