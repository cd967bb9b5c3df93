"""Tools available to the chat agent."""

from .memory import RECALL_MEMORY, SAVE_MEMORY, build_memory_tools, register_memory_tools
from .registry import ToolHandler, ToolRegistry, ToolResult, ToolSpec

__all__ = [
    "RECALL_MEMORY",
    "SAVE_MEMORY",
    "ToolHandler",
    "ToolRegistry",
    "ToolResult",
    "ToolSpec",
    "build_memory_tools",
    "register_memory_tools",
]
