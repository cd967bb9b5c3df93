from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class Visibility(str, Enum):
    DISPLAYED = "displayed"
    HISTORY_ONLY = "history_only"


class EntryKind(str, Enum):
    """What an entry is for.

    Only ``MESSAGE`` entries are replayed to the provider; summaries of tool
    results and turn errors are shown to the user but never sent back.
    """

    MESSAGE = "message"
    TOOL_SUMMARY = "tool_summary"
    ERROR = "error"


def _new_id() -> str:
    return uuid.uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PendingToolCall(BaseModel):
    """A tool call requested by the assistant, kept verbatim for replay."""

    model_config = ConfigDict(frozen=True)

    call_id: str
    tool_name: str
    raw_arguments: str = ""


class ToolCall(BaseModel):
    """A tool call with its arguments decoded into a mapping."""

    model_config = ConfigDict(frozen=True)

    call_id: str
    tool_name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class Entry(BaseModel):
    """One immutable unit of the conversation log."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    role: Role
    text: str = ""
    created_at: datetime = Field(default_factory=_utc_now)
    pending_tool_calls: Tuple[PendingToolCall, ...] = ()
    responds_to_call_id: Optional[str] = None
    visibility: Visibility = Visibility.DISPLAYED
    kind: EntryKind = EntryKind.MESSAGE

    @model_validator(mode="after")
    def _check_role_fields(self) -> "Entry":
        if self.pending_tool_calls and self.role is not Role.ASSISTANT:
            raise ValueError("only assistant entries may carry pending tool calls")
        if self.role is Role.TOOL:
            if not self.responds_to_call_id:
                raise ValueError("tool entries must reference the call they answer")
        elif self.responds_to_call_id is not None:
            raise ValueError("responds_to_call_id is only valid on tool entries")
        return self

    @property
    def in_request_context(self) -> bool:
        return self.kind is EntryKind.MESSAGE

    @property
    def in_display(self) -> bool:
        return self.visibility is Visibility.DISPLAYED

    # Convenience constructors used by the turn orchestrator

    @classmethod
    def user(cls, text: str) -> "Entry":
        return cls(role=Role.USER, text=text)

    @classmethod
    def assistant(cls, text: str, pending_tool_calls: Tuple[PendingToolCall, ...] = ()) -> "Entry":
        return cls(role=Role.ASSISTANT, text=text, pending_tool_calls=tuple(pending_tool_calls))

    @classmethod
    def tool_response(cls, call_id: str, machine_result: str) -> "Entry":
        return cls(
            role=Role.TOOL,
            text=machine_result,
            responds_to_call_id=call_id,
            visibility=Visibility.HISTORY_ONLY,
        )

    @classmethod
    def tool_summary(cls, summary: str) -> "Entry":
        return cls(role=Role.ASSISTANT, text=summary, kind=EntryKind.TOOL_SUMMARY)

    @classmethod
    def error(cls, message: str) -> "Entry":
        return cls(role=Role.ASSISTANT, text=f"Error: {message}", kind=EntryKind.ERROR)


__all__ = [
    "Entry",
    "EntryKind",
    "PendingToolCall",
    "Role",
    "ToolCall",
    "Visibility",
]
