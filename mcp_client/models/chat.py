from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .conversation import Entry


class ChatSendRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: str = Field(...)

    @model_validator(mode="before")
    @classmethod
    def _coerce_message(cls, data: Any) -> Any:
        if isinstance(data, dict) and "message" in data:
            message = data["message"]
            data = {**data, "message": "" if message is None else str(message)}
        return data


class ToolCallView(BaseModel):
    call_id: str
    tool_name: str
    arguments: str


class ChatEntry(BaseModel):
    id: str
    role: str
    kind: str
    content: str
    timestamp: datetime
    tool_calls: List[ToolCallView] = Field(default_factory=list)

    @classmethod
    def from_entry(cls, entry: Entry) -> "ChatEntry":
        return cls(
            id=entry.id,
            role=entry.role.value,
            kind=entry.kind.value,
            content=entry.text,
            timestamp=entry.created_at,
            tool_calls=[
                ToolCallView(call_id=call.call_id, tool_name=call.tool_name, arguments=call.raw_arguments)
                for call in entry.pending_tool_calls
            ],
        )


class ChatSendResponse(BaseModel):
    ok: bool = True
    status: str
    text: str = ""
    error: Optional[str] = None
    entries: List[ChatEntry] = Field(default_factory=list)


class ChatHistoryResponse(BaseModel):
    messages: List[ChatEntry] = Field(default_factory=list)


class MemoryView(BaseModel):
    id: str
    timestamp: str
    content: str


class MemoryListResponse(BaseModel):
    memories: List[MemoryView] = Field(default_factory=list)


class MemoryClearResponse(BaseModel):
    ok: bool = True
