"""Conversation-related service helpers."""

from .history import DEFAULT_REQUEST_WINDOW, HistoryManager, unanswered_calls

__all__ = [
    "DEFAULT_REQUEST_WINDOW",
    "HistoryManager",
    "unanswered_calls",
]
