from __future__ import annotations

from typing import Callable

import pytest

from fakes import FakeTransport
from mcp_client.agents.chat_agent import (
    ChatAgentRuntime,
    RequestBuilder,
    ToolRegistry,
    register_memory_tools,
)
from mcp_client.services import HistoryManager, MemoryStore


@pytest.fixture
def memory_store(tmp_path) -> MemoryStore:
    return MemoryStore(tmp_path / "memories" / "memory_data.json", timezone_name="UTC")


@pytest.fixture
def registry(memory_store: MemoryStore) -> ToolRegistry:
    return register_memory_tools(ToolRegistry(), memory_store)


@pytest.fixture
def builder() -> RequestBuilder:
    return RequestBuilder(api_key="sk-test", system_prompt="You are a test assistant.")


@pytest.fixture
def make_runtime(registry: ToolRegistry, builder: RequestBuilder) -> Callable[..., ChatAgentRuntime]:
    """Build a runtime over a fresh history with the given transport."""

    def _make(transport: FakeTransport, **kwargs) -> ChatAgentRuntime:
        kwargs.setdefault("builder", builder)
        return ChatAgentRuntime(
            history=HistoryManager(),
            registry=registry,
            transport=transport,
            **kwargs,
        )

    return _make
