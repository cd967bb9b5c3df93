from __future__ import annotations

import pytest

from mcp_client.models import Entry, EntryKind, PendingToolCall, Role, Visibility
from mcp_client.services.conversation import HistoryManager, unanswered_calls


def _chat(count: int) -> HistoryManager:
    history = HistoryManager()
    for index in range(count):
        role_entry = Entry.user if index % 2 == 0 else Entry.assistant
        history.append(role_entry(f"message {index}"))
    return history


def _tool_exchange(history: HistoryManager, *call_ids: str) -> None:
    calls = tuple(PendingToolCall(call_id=cid, tool_name="my_apple_recall_memory") for cid in call_ids)
    history.append(Entry.assistant("", calls))
    for cid in call_ids:
        history.append(Entry.tool_summary(f"summary for {cid}"))
        history.append(Entry.tool_response(cid, '{"result": "ok"}'))


@pytest.mark.parametrize("length", [0, 1, 5, 10, 11, 25])
@pytest.mark.parametrize("cap", [1, 3, 10])
def test_window_returns_min_of_cap_and_length_in_order(length: int, cap: int) -> None:
    history = _chat(length)
    window = history.window_for_request(cap)

    assert len(window) == min(cap, length)
    expected = [entry.text for entry in history.entries()][-cap:] if length else []
    assert [entry.text for entry in window] == expected


def test_default_window_is_ten_entries() -> None:
    history = _chat(15)
    window = history.window_for_request()
    assert len(window) == 10
    assert window[0].text == "message 5"


def test_append_keeps_duplicates_and_order() -> None:
    history = HistoryManager()
    first = history.append(Entry.user("hello"))
    second = history.append(Entry.user("hello"))

    assert len(history) == 2
    assert history.entries() == (first, second)
    assert first.id != second.id
    assert history.last() is second


def test_window_excludes_summaries_and_errors_but_keeps_tool_entries() -> None:
    history = HistoryManager()
    history.append(Entry.user("what do you remember?"))
    _tool_exchange(history, "call_1")
    history.append(Entry.error("OpenAI request failed"))

    window = history.window_for_request(10)

    assert [entry.role for entry in window] == [Role.USER, Role.ASSISTANT, Role.TOOL]
    assert all(entry.kind is EntryKind.MESSAGE for entry in window)


def test_display_window_hides_history_only_entries() -> None:
    history = HistoryManager()
    history.append(Entry.user("remember this"))
    _tool_exchange(history, "call_1")

    displayed = history.window_for_display()

    assert [entry.kind for entry in displayed] == [EntryKind.MESSAGE, EntryKind.MESSAGE, EntryKind.TOOL_SUMMARY]
    assert all(entry.visibility is Visibility.DISPLAYED for entry in displayed)


def test_window_extends_to_keep_tool_call_with_its_responses() -> None:
    history = HistoryManager()
    history.append(Entry.user("first"))
    _tool_exchange(history, "call_a", "call_b")
    history.append(Entry.user("second"))

    # context: user, assistant(call_a, call_b), tool a, tool b, user
    window = history.window_for_request(2)

    assert window[0].role is Role.ASSISTANT
    assert [call.call_id for call in window[0].pending_tool_calls] == ["call_a", "call_b"]
    assert [entry.role for entry in window] == [Role.ASSISTANT, Role.TOOL, Role.TOOL, Role.USER]
    assert unanswered_calls(window) == []


def test_window_not_extended_when_cut_is_clean() -> None:
    history = HistoryManager()
    history.append(Entry.user("first"))
    _tool_exchange(history, "call_a")
    history.append(Entry.user("second"))
    history.append(Entry.assistant("reply"))

    window = history.window_for_request(2)
    assert [entry.text for entry in window] == ["second", "reply"]


def test_window_rejects_non_positive_cap() -> None:
    with pytest.raises(ValueError):
        HistoryManager().window_for_request(0)


def test_unanswered_calls_reports_missing_responses() -> None:
    calls = (
        PendingToolCall(call_id="call_1", tool_name="x"),
        PendingToolCall(call_id="call_2", tool_name="y"),
    )
    entries = [Entry.assistant("", calls), Entry.tool_response("call_1", "{}")]
    assert unanswered_calls(entries) == ["call_2"]


def test_tool_entry_requires_call_reference() -> None:
    with pytest.raises(ValueError):
        Entry(role=Role.TOOL, text="{}")


def test_only_assistant_entries_carry_tool_calls() -> None:
    with pytest.raises(ValueError):
        Entry(role=Role.USER, text="hi", pending_tool_calls=(PendingToolCall(call_id="c", tool_name="t"),))


def test_entries_are_immutable() -> None:
    entry = Entry.user("hi")
    with pytest.raises(ValueError):
        entry.text = "changed"  # type: ignore[misc]
