"""Error taxonomy shared by the chat pipeline."""

from __future__ import annotations


class ChatClientError(RuntimeError):
    """Base class for failures that end a conversational turn."""


class MissingCredentialError(ChatClientError):
    """Raised when no OpenAI API key can be resolved."""


class TransportError(ChatClientError):
    """Raised when the chat completion request fails on the wire."""


class MalformedResponseError(ChatClientError):
    """Raised when the provider reply lacks the expected envelope."""


class IncompleteToolExchangeError(ChatClientError):
    """Raised when a request would carry a tool call without its tool response."""


class TurnInProgressError(ChatClientError):
    """Raised when a new turn is started while another one is still running."""


class UnknownToolError(LookupError):
    """Raised by the tool registry for names it does not know."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ToolExecutionError(RuntimeError):
    """Raised by tool handlers for invalid input; reported back as a failed tool result."""


class MemoryStoreError(RuntimeError):
    """Raised when the memory file cannot be written."""


__all__ = [
    "ChatClientError",
    "IncompleteToolExchangeError",
    "MalformedResponseError",
    "MemoryStoreError",
    "MissingCredentialError",
    "ToolExecutionError",
    "TransportError",
    "TurnInProgressError",
    "UnknownToolError",
]
