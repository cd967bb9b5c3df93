"""Chat agent prompt and provider request construction."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from ...config import DEFAULT_MODEL, DEFAULT_TEMPERATURE
from ...errors import IncompleteToolExchangeError, MissingCredentialError
from ...models.conversation import Entry, Role
from ...models.wire import (
    AssistantMessage,
    ChatCompletionRequest,
    FunctionCall,
    ProviderRequest,
    RequestMessage,
    SystemMessage,
    ToolDefinition,
    ToolMessage,
    UserMessage,
    WireToolCall,
)
from ...openai_client import MISSING_KEY_MESSAGE
from ...services.conversation.history import unanswered_calls

_prompt_path = Path(__file__).parent / "system_prompt.md"
SYSTEM_PROMPT = _prompt_path.read_text(encoding="utf-8").strip()


# Return the static system prompt for the chat agent
def build_system_prompt() -> str:
    return SYSTEM_PROMPT


def entry_to_message(entry: Entry) -> RequestMessage:
    """Translate a conversation entry into its provider message."""

    if entry.role is Role.USER:
        return UserMessage(content=entry.text)

    if entry.role is Role.TOOL:
        return ToolMessage(tool_call_id=entry.responds_to_call_id or "", content=entry.text)

    if entry.pending_tool_calls:
        return AssistantMessage(
            content=entry.text or None,
            tool_calls=[
                WireToolCall(
                    id=call.call_id,
                    function=FunctionCall(name=call.tool_name, arguments=call.raw_arguments),
                )
                for call in entry.pending_tool_calls
            ],
        )
    return AssistantMessage(content=entry.text)


class RequestBuilder:
    """Turns a history window and tool schemas into a chat completion request."""

    def __init__(
        self,
        *,
        api_key: str,
        system_prompt: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        self._api_key = (api_key or "").strip()
        self.system_prompt = system_prompt if system_prompt is not None else build_system_prompt()
        self.model = model
        self.temperature = temperature

    @property
    def has_credential(self) -> bool:
        return bool(self._api_key)

    def build(
        self,
        window: Sequence[Entry],
        tools: Sequence[ToolDefinition],
        user_text: Optional[str] = None,
    ) -> ProviderRequest:
        if not self._api_key:
            raise MissingCredentialError(MISSING_KEY_MESSAGE)

        missing = unanswered_calls(window)
        if missing:
            raise IncompleteToolExchangeError(
                f"Tool calls without responses: {', '.join(missing)}"
            )

        messages: List[RequestMessage] = [SystemMessage(content=self.system_prompt)]
        messages.extend(entry_to_message(entry) for entry in window)

        if user_text is not None and not _ends_with_user_text(window, user_text):
            messages.append(UserMessage(content=user_text))

        payload = ChatCompletionRequest(
            model=self.model,
            messages=messages,
            tools=list(tools),
            temperature=self.temperature,
        )
        return ProviderRequest(payload=payload, api_key=self._api_key)


def _ends_with_user_text(window: Sequence[Entry], user_text: str) -> bool:
    if not window:
        return False
    last = window[-1]
    return last.role is Role.USER and last.text == user_text


__all__ = ["RequestBuilder", "SYSTEM_PROMPT", "build_system_prompt", "entry_to_message"]
