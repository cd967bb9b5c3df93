from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ...logging_config import logger
from ...models.conversation import Entry, Role

DEFAULT_REQUEST_WINDOW = 10


def unanswered_calls(entries: Iterable[Entry]) -> List[str]:
    """Return ids of tool calls in *entries* that have no matching tool entry."""

    pending: Dict[str, None] = {}
    for entry in entries:
        for call in entry.pending_tool_calls:
            pending[call.call_id] = None
        if entry.role is Role.TOOL and entry.responds_to_call_id in pending:
            del pending[entry.responds_to_call_id]
    return list(pending)


class HistoryManager:
    """In-memory, append-only conversation log for a single chat session.

    Storage is never truncated; callers take windows over it instead. Only
    the turn orchestrator appends, so no locking is needed.
    """

    def __init__(self, entries: Optional[Iterable[Entry]] = None):
        self._entries: List[Entry] = list(entries or ())

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, entry: Entry) -> Entry:
        self._entries.append(entry)
        logger.debug(
            "history append",
            extra={"role": entry.role.value, "kind": entry.kind.value, "size": len(self._entries)},
        )
        return entry

    def last(self) -> Optional[Entry]:
        return self._entries[-1] if self._entries else None

    def entries(self) -> Tuple[Entry, ...]:
        return tuple(self._entries)

    def window_for_request(self, max_entries: int = DEFAULT_REQUEST_WINDOW) -> List[Entry]:
        """Return the newest *max_entries* provider-context entries in insertion order.

        When the cut lands on a tool response whose call was issued just
        outside the window, the window grows backwards to include the
        issuing assistant entry so call/response pairs always travel together.
        """

        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")

        context = [entry for entry in self._entries if entry.in_request_context]
        start = max(len(context) - max_entries, 0)
        start = _extend_to_call_owner(context, start)
        return context[start:]

    def window_for_display(self) -> List[Entry]:
        return [entry for entry in self._entries if entry.in_display]


def _extend_to_call_owner(context: Sequence[Entry], start: int) -> int:
    window = context[start:]
    issued = {call.call_id for entry in window for call in entry.pending_tool_calls}
    orphaned = {
        entry.responds_to_call_id
        for entry in window
        if entry.role is Role.TOOL and entry.responds_to_call_id not in issued
    }
    index = start
    while orphaned and index > 0:
        index -= 1
        for call in context[index].pending_tool_calls:
            orphaned.discard(call.call_id)
    return index


__all__ = ["DEFAULT_REQUEST_WINDOW", "HistoryManager", "unanswered_calls"]
