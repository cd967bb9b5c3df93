"""Service layer components.

The chat session lives in ``services.conversation.session`` and is imported
from there directly; it depends on the agent package, which in turn uses the
stores exported here.
"""

from .conversation import HistoryManager
from .memory import MemoryRecord, MemoryStore, get_memory_store

__all__ = [
    "HistoryManager",
    "MemoryRecord",
    "MemoryStore",
    "get_memory_store",
]
