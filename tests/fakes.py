"""Canned provider replies and a scripted transport for runtime tests."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple, Union

from mcp_client.models.wire import ProviderRequest


def text_reply(content: Optional[str]) -> Dict[str, Any]:
    return {
        "id": "chatcmpl-test",
        "model": "gpt-4o",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


def tool_reply(*calls: Tuple[Optional[str], str, Any], content: Optional[str] = None) -> Dict[str, Any]:
    """Build a reply requesting ``(call_id, name, arguments)`` tool calls.

    Non-string arguments are JSON-encoded the way the provider sends them and
    a ``None`` call id leaves the id out.
    """
    tool_calls = []
    for call_id, name, arguments in calls:
        encoded = arguments if isinstance(arguments, str) else json.dumps(arguments)
        tool_call: Dict[str, Any] = {"type": "function", "function": {"name": name, "arguments": encoded}}
        if call_id is not None:
            tool_call["id"] = call_id
        tool_calls.append(tool_call)
    return {
        "id": "chatcmpl-test",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content, "tool_calls": tool_calls},
                "finish_reason": "tool_calls",
            }
        ],
    }


Scripted = Union[Dict[str, Any], BaseException]


class FakeTransport:
    """Replays scripted replies (or raises scripted errors) and records requests."""

    def __init__(self, *replies: Scripted):
        self.replies: List[Scripted] = list(replies)
        self.requests: List[ProviderRequest] = []

    async def __call__(self, request: ProviderRequest) -> Dict[str, Any]:
        self.requests.append(request)
        if not self.replies:
            raise AssertionError("transport called more times than scripted")
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply

    def sent_messages(self, index: int = -1) -> List[Dict[str, Any]]:
        return self.requests[index].payload.to_payload()["messages"]
