from .chat import (
    ChatEntry,
    ChatHistoryResponse,
    ChatSendRequest,
    ChatSendResponse,
    MemoryClearResponse,
    MemoryListResponse,
    MemoryView,
    ToolCallView,
)
from .conversation import Entry, EntryKind, PendingToolCall, Role, ToolCall, Visibility
from .meta import HealthResponse, RootResponse

__all__ = [
    "ChatEntry",
    "ChatHistoryResponse",
    "ChatSendRequest",
    "ChatSendResponse",
    "Entry",
    "EntryKind",
    "HealthResponse",
    "MemoryClearResponse",
    "MemoryListResponse",
    "MemoryView",
    "PendingToolCall",
    "Role",
    "RootResponse",
    "ToolCall",
    "ToolCallView",
    "Visibility",
]
