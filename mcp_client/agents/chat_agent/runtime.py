"""Chat Agent Runtime - drives one user turn through the model and local tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ...errors import ChatClientError, TurnInProgressError, UnknownToolError
from ...logging_config import logger
from ...models.conversation import Entry, ToolCall
from ...models.wire import ProviderRequest
from ...services.conversation.history import DEFAULT_REQUEST_WINDOW, HistoryManager
from .agent import RequestBuilder
from .interpreter import InterpretedReply, ResponseInterpreter
from .tools.registry import ToolRegistry, ToolResult

Transport = Callable[[ProviderRequest], Awaitable[Dict[str, Any]]]


class TurnStatus(str, Enum):
    COMPLETED_TEXT = "completed_text"
    COMPLETED_TOOLS = "completed_tools"
    FAILED = "failed"


@dataclass
class ToolOutcome:
    call: ToolCall
    result: ToolResult


@dataclass
class TurnResult:
    """Terminal state of a turn plus the displayed entries it produced."""

    status: TurnStatus
    text: str = ""
    error: Optional[str] = None
    tool_results: List[ToolOutcome] = field(default_factory=list)
    entries: List[Entry] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status is not TurnStatus.FAILED


class ChatAgentRuntime:
    """Runs turns against a single conversation.

    By default at most one batch of tool calls is processed per user message
    and the turn ends there; ``max_tool_rounds`` above 1 lets the model react
    to tool output with follow-up requests, bounded by that many batches.
    """

    def __init__(
        self,
        *,
        history: HistoryManager,
        registry: ToolRegistry,
        builder: RequestBuilder,
        transport: Transport,
        interpreter: Optional[ResponseInterpreter] = None,
        window_size: int = DEFAULT_REQUEST_WINDOW,
        max_tool_rounds: int = 1,
    ) -> None:
        if max_tool_rounds < 1:
            raise ValueError("max_tool_rounds must be at least 1")
        self.history = history
        self.registry = registry
        self.builder = builder
        self.transport = transport
        self.interpreter = interpreter or ResponseInterpreter()
        self.window_size = window_size
        self.max_tool_rounds = max_tool_rounds
        self._processing = False

    @property
    def is_processing(self) -> bool:
        return self._processing

    # Main entry point: one user message in, one terminal turn state out
    async def execute(self, user_message: str) -> TurnResult:
        text = (user_message or "").strip()
        if not text:
            raise ValueError("Message must not be empty")
        if self._processing:
            raise TurnInProgressError("A message is already being processed")

        self._processing = True
        displayed: List[Entry] = []
        try:
            self._append(Entry.user(text), displayed)
            logger.info("Processing user message through chat agent", extra={"message_length": len(text)})
            return await self._run_turn(text, displayed)
        except Exception as exc:
            logger.exception("Chat turn crashed")
            return self._fail(str(exc) or type(exc).__name__, displayed)
        finally:
            self._processing = False

    async def _run_turn(self, user_text: str, displayed: List[Entry]) -> TurnResult:
        outcomes: List[ToolOutcome] = []

        for round_index in range(self.max_tool_rounds):
            try:
                reply = await self._request_reply(user_text if round_index == 0 else None)
            except ChatClientError as exc:
                logger.error("Chat request failed", extra={"error": str(exc), "round": round_index + 1})
                return self._fail(str(exc), displayed, outcomes)

            if not reply.has_tool_calls:
                self._append(Entry.assistant(reply.text), displayed)
                return TurnResult(
                    status=TurnStatus.COMPLETED_TEXT,
                    text=reply.text,
                    tool_results=outcomes,
                    entries=displayed,
                )

            self._append(Entry.assistant(reply.text, tuple(reply.pending_calls)), displayed)
            for call in reply.tool_calls:
                outcomes.append(await self._dispatch(call, displayed))

        summaries = "\n\n".join(outcome.result.summary_text for outcome in outcomes)
        return TurnResult(
            status=TurnStatus.COMPLETED_TOOLS,
            text=summaries,
            tool_results=outcomes,
            entries=displayed,
        )

    async def _request_reply(self, user_text: Optional[str]) -> InterpretedReply:
        window = self.history.window_for_request(self.window_size)
        request = self.builder.build(window, self.registry.tool_definitions(), user_text=user_text)
        logger.debug(
            "Chat agent calling LLM",
            extra={"model": request.payload.model, "messages": len(request.payload.messages)},
        )
        raw = await self.transport(request)
        return self.interpreter.interpret(raw)

    # Calls run strictly in the order the model listed them
    async def _dispatch(self, call: ToolCall, displayed: List[Entry]) -> ToolOutcome:
        logger.info(f"Executing tool: {call.tool_name}", extra={"call_id": call.call_id})
        try:
            result = await self.registry.invoke(call.tool_name, call.arguments)
        except UnknownToolError as exc:
            logger.warning("Model requested unknown tool", extra={"tool": call.tool_name})
            result = ToolResult.failure(
                f"Error: the assistant requested an unknown tool '{call.tool_name}'.",
                str(exc),
            )

        self._append(Entry.tool_summary(result.summary_text), displayed)
        self._append(Entry.tool_response(call.call_id, result.machine_result), displayed)
        return ToolOutcome(call=call, result=result)

    def _append(self, entry: Entry, displayed: List[Entry]) -> None:
        self.history.append(entry)
        if entry.in_display:
            displayed.append(entry)

    def _fail(
        self,
        message: str,
        displayed: List[Entry],
        outcomes: Optional[List[ToolOutcome]] = None,
    ) -> TurnResult:
        self._append(Entry.error(message), displayed)
        return TurnResult(
            status=TurnStatus.FAILED,
            error=message,
            tool_results=list(outcomes or []),
            entries=displayed,
        )


__all__ = ["ChatAgentRuntime", "ToolOutcome", "Transport", "TurnResult", "TurnStatus"]
