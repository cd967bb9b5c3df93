"""Parse chat completion replies into assistant text and tool calls."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from ...errors import MalformedResponseError
from ...logging_config import logger
from ...models.conversation import PendingToolCall, ToolCall
from ...models.wire import ChatCompletionResponse, WireToolCall


@dataclass
class InterpretedReply:
    """The parts of a provider reply the turn orchestrator acts on."""

    text: str = ""
    tool_calls: List[ToolCall] = field(default_factory=list)
    pending_calls: List[PendingToolCall] = field(default_factory=list)

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)


def _synthesize_call_id() -> str:
    # Ids must stay unique across the log or replayed pairs get mismatched.
    return f"call_{uuid.uuid4().hex}"


def decode_arguments(raw_arguments: Optional[str]) -> Tuple[Dict[str, Any], Optional[str]]:
    """Decode an encoded argument blob into a mapping, reporting why it failed.

    Failures degrade to an empty mapping; a tool that needs arguments will
    reject the call itself.
    """

    if raw_arguments is None or not raw_arguments.strip():
        return {}, None
    try:
        parsed = json.loads(raw_arguments)
    except json.JSONDecodeError as exc:
        return {}, f"invalid json: {exc}"
    if isinstance(parsed, dict):
        return parsed, None
    return {}, "decoded arguments were not an object"


class ResponseInterpreter:
    """Validates the reply envelope and normalizes its tool calls."""

    def interpret(self, raw: Any) -> InterpretedReply:
        if not isinstance(raw, dict):
            raise MalformedResponseError("OpenAI reply was not a JSON object")

        try:
            response = ChatCompletionResponse.model_validate(raw)
        except ValidationError as exc:
            logger.warning("malformed completion reply", extra={"errors": exc.error_count()})
            raise MalformedResponseError("Failed to parse response") from exc

        message = response.choices[0].message
        reply = InterpretedReply(text=message.content or "")
        raw_calls = message.tool_calls or []
        for raw_call in raw_calls:
            parsed = self._parse_tool_call(raw_call)
            if parsed is None:
                continue
            call, pending = parsed
            reply.tool_calls.append(call)
            reply.pending_calls.append(pending)

        if raw_calls and not reply.tool_calls and not reply.text:
            raise MalformedResponseError("OpenAI reply requested tools without naming them")
        return reply

    def _parse_tool_call(self, raw_call: WireToolCall) -> Optional[Tuple[ToolCall, PendingToolCall]]:
        name = raw_call.function.name
        if not name:
            logger.warning("Skipping tool call without name", extra={"call_id": raw_call.id})
            return None

        arguments, error = decode_arguments(raw_call.function.arguments)
        if error:
            logger.warning("Tool call arguments invalid", extra={"tool": name, "error": error})

        call_id = raw_call.id or _synthesize_call_id()
        return (
            ToolCall(call_id=call_id, tool_name=name, arguments=arguments),
            PendingToolCall(call_id=call_id, tool_name=name, raw_arguments=raw_call.function.arguments),
        )


__all__ = ["InterpretedReply", "ResponseInterpreter", "decode_arguments"]
