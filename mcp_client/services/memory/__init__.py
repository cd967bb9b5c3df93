"""Durable memory notes consulted by the memory tools."""

from .models import MemoryRecord
from .store import MemoryStore, get_memory_store

__all__ = ["MemoryRecord", "MemoryStore", "get_memory_store"]
