"""Process-wide chat session: one conversation, its tools and its runtime."""

from __future__ import annotations

from functools import lru_cache, partial
from typing import Optional

from ...agents.chat_agent import ChatAgentRuntime, RequestBuilder, ToolRegistry, register_memory_tools
from ...agents.chat_agent.runtime import Transport
from ...config import Settings, get_settings
from ...logging_config import logger
from ...openai_client import post_chat_completion
from ..memory import MemoryStore, get_memory_store
from .history import HistoryManager


class ChatSession:
    """Owns the in-memory history for the lifetime of the process."""

    def __init__(
        self,
        settings: Settings,
        *,
        memory_store: MemoryStore,
        transport: Optional[Transport] = None,
    ):
        self.settings = settings
        self.memory_store = memory_store
        self.history = HistoryManager()
        self.registry = register_memory_tools(ToolRegistry(), memory_store)
        self.builder = RequestBuilder(
            api_key=settings.openai_api_key,
            model=settings.chat_model,
            temperature=settings.temperature,
        )
        self.runtime = ChatAgentRuntime(
            history=self.history,
            registry=self.registry,
            builder=self.builder,
            transport=transport
            or partial(
                post_chat_completion,
                base_url=settings.openai_base_url,
                timeout=settings.request_timeout,
            ),
            window_size=settings.history_window,
            max_tool_rounds=settings.max_tool_rounds,
        )

        if not self.builder.has_credential:
            logger.warning("OpenAI API key not configured; chat turns will fail until OPENAI_API_KEY is set")


@lru_cache(maxsize=1)
def get_chat_session() -> ChatSession:
    """Get the singleton chat session."""
    return ChatSession(get_settings(), memory_store=get_memory_store())


__all__ = ["ChatSession", "get_chat_session"]
