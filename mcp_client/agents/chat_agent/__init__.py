"""Chat agent module."""

from .agent import RequestBuilder, build_system_prompt, entry_to_message
from .interpreter import InterpretedReply, ResponseInterpreter, decode_arguments
from .runtime import ChatAgentRuntime, ToolOutcome, TurnResult, TurnStatus
from .tools import ToolRegistry, ToolResult, ToolSpec, register_memory_tools

__all__ = [
    "ChatAgentRuntime",
    "InterpretedReply",
    "RequestBuilder",
    "ResponseInterpreter",
    "ToolOutcome",
    "ToolRegistry",
    "ToolResult",
    "ToolSpec",
    "TurnResult",
    "TurnStatus",
    "build_system_prompt",
    "decode_arguments",
    "entry_to_message",
    "register_memory_tools",
]
