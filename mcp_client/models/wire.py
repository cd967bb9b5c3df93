"""Typed shapes of the chat completion request and reply bodies."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FunctionCall(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    arguments: str = ""

    @field_validator("arguments", mode="before")
    @classmethod
    def _coerce_arguments(cls, value: Any) -> Any:
        # Some compatible providers send the arguments already decoded.
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        try:
            return json.dumps(value)
        except (TypeError, ValueError):
            return ""


class WireToolCall(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    type: Literal["function"] = "function"
    function: FunctionCall


# Request side

class SystemMessage(BaseModel):
    role: Literal["system"] = "system"
    content: str


class UserMessage(BaseModel):
    role: Literal["user"] = "user"
    content: str


class AssistantMessage(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: Optional[str] = None
    tool_calls: Optional[List[WireToolCall]] = None


class ToolMessage(BaseModel):
    role: Literal["tool"] = "tool"
    tool_call_id: str
    content: str


RequestMessage = Annotated[
    Union[SystemMessage, UserMessage, AssistantMessage, ToolMessage],
    Field(discriminator="role"),
]


class FunctionDefinition(BaseModel):
    name: str
    description: str
    parameters: Dict[str, Any]


class ToolDefinition(BaseModel):
    type: Literal["function"] = "function"
    function: FunctionDefinition


class ChatCompletionRequest(BaseModel):
    model: str
    messages: List[RequestMessage]
    tools: List[ToolDefinition] = Field(default_factory=list)
    temperature: float

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON-ready body, omitting unset optional fields."""
        payload = self.model_dump(mode="json", exclude_none=True)
        if not payload.get("tools"):
            payload.pop("tools", None)
        return payload


@dataclass(frozen=True)
class ProviderRequest:
    """A built request together with the credential it must be sent with."""

    payload: ChatCompletionRequest
    api_key: str = field(repr=False)


# Reply side

class ReplyMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: Optional[str] = None
    content: Optional[str] = None
    tool_calls: Optional[List[WireToolCall]] = None


class Choice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    index: int = 0
    message: ReplyMessage
    finish_reason: Optional[str] = None


class ChatCompletionResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    model: Optional[str] = None
    choices: List[Choice] = Field(min_length=1)


__all__ = [
    "AssistantMessage",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "Choice",
    "FunctionCall",
    "FunctionDefinition",
    "ProviderRequest",
    "ReplyMessage",
    "RequestMessage",
    "SystemMessage",
    "ToolDefinition",
    "ToolMessage",
    "UserMessage",
    "WireToolCall",
]
