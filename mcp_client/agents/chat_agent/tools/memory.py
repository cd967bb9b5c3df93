"""Memory tools: let the model save and recall short notes about the user."""

from __future__ import annotations

from functools import partial
from typing import Any, List, Mapping, Tuple

from ....errors import ToolExecutionError
from ....services.memory import MemoryStore
from .registry import ToolHandler, ToolRegistry, ToolResult, ToolSpec, dump_json

RECALL_MEMORY = "my_apple_recall_memory"
SAVE_MEMORY = "my_apple_save_memory"

NO_MEMORIES_MESSAGE = "No memories found."
SAVED_MEMORY_MESSAGE = "Memory saved successfully."

RECALL_SPEC = ToolSpec(
    name=RECALL_MEMORY,
    description="Retrieve all saved memories, newest first. Use this to recall context about the user.",
    parameters={
        "type": "object",
        "properties": {},
        "required": [],
    },
)

SAVE_SPEC = ToolSpec(
    name=SAVE_MEMORY,
    description="Save a meaningful piece of information to memory for future reference.",
    parameters={
        "type": "object",
        "properties": {
            "content": {
                "type": "string",
                "description": "The information to remember, written as a short self-contained note.",
            },
        },
        "required": ["content"],
    },
)


# List stored memories newest first for both the user and the model
def recall_memory(store: MemoryStore, arguments: Mapping[str, Any]) -> ToolResult:
    records = sorted(store.list_entries(), key=lambda record: record.timestamp, reverse=True)
    if not records:
        return ToolResult(
            summary_text=NO_MEMORIES_MESSAGE,
            machine_result=dump_json({"result": NO_MEMORIES_MESSAGE}),
        )

    rendered = [
        {"timestamp": store.format_timestamp(record.timestamp), "content": record.content}
        for record in records
    ]
    lines = ["Here are your memories:"]
    lines.extend(f"• {item['timestamp']}: {item['content']}" for item in rendered)
    return ToolResult(
        summary_text="\n".join(lines),
        machine_result=dump_json({"memories": rendered}),
    )


# Validate and persist a new memory note
def save_memory(store: MemoryStore, arguments: Mapping[str, Any]) -> ToolResult:
    content = arguments.get("content")
    if not isinstance(content, str) or not content.strip():
        raise ToolExecutionError("Failed to save memory: 'content' must be a non-empty string.")

    text = content.strip()
    store.append_entry(text)
    return ToolResult(
        summary_text=f'Saved memory: "{text}"',
        machine_result=dump_json({"result": SAVED_MEMORY_MESSAGE, "content": text}),
    )


def build_memory_tools(store: MemoryStore) -> List[Tuple[ToolSpec, ToolHandler]]:
    return [
        (RECALL_SPEC, partial(recall_memory, store)),
        (SAVE_SPEC, partial(save_memory, store)),
    ]


def register_memory_tools(registry: ToolRegistry, store: MemoryStore) -> ToolRegistry:
    for spec, handler in build_memory_tools(store):
        registry.register(spec, handler)
    return registry


__all__ = [
    "NO_MEMORIES_MESSAGE",
    "RECALL_MEMORY",
    "SAVED_MEMORY_MESSAGE",
    "SAVE_MEMORY",
    "build_memory_tools",
    "recall_memory",
    "register_memory_tools",
    "save_memory",
]
