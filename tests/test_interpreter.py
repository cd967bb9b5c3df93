from __future__ import annotations

import pytest

from fakes import text_reply, tool_reply
from mcp_client.agents.chat_agent import ResponseInterpreter, decode_arguments
from mcp_client.errors import MalformedResponseError


@pytest.fixture
def interpreter() -> ResponseInterpreter:
    return ResponseInterpreter()


def test_plain_text_reply(interpreter: ResponseInterpreter) -> None:
    reply = interpreter.interpret(text_reply("Hello there"))
    assert reply.text == "Hello there"
    assert reply.tool_calls == []
    assert not reply.has_tool_calls


def test_missing_content_defaults_to_empty(interpreter: ResponseInterpreter) -> None:
    reply = interpreter.interpret(text_reply(None))
    assert reply.text == ""


def test_tool_call_arguments_are_decoded(interpreter: ResponseInterpreter) -> None:
    raw = tool_reply(("call_1", "my_apple_save_memory", '{"content":"x"}'))

    reply = interpreter.interpret(raw)

    assert len(reply.tool_calls) == 1
    call = reply.tool_calls[0]
    assert call.call_id == "call_1"
    assert call.tool_name == "my_apple_save_memory"
    assert call.arguments == {"content": "x"}
    assert reply.pending_calls[0].raw_arguments == '{"content":"x"}'


def test_tool_calls_keep_provider_order(interpreter: ResponseInterpreter) -> None:
    raw = tool_reply(
        ("call_b", "my_apple_save_memory", {"content": "b"}),
        ("call_a", "my_apple_recall_memory", "{}"),
    )
    reply = interpreter.interpret(raw)
    assert [call.call_id for call in reply.tool_calls] == ["call_b", "call_a"]


@pytest.mark.parametrize("arguments", ["{not json", "[1, 2]", '"text"', "", "   "])
def test_undecodable_arguments_degrade_to_empty_mapping(
    interpreter: ResponseInterpreter, arguments: str
) -> None:
    reply = interpreter.interpret(tool_reply(("call_1", "my_apple_save_memory", arguments)))
    assert reply.tool_calls[0].arguments == {}


def test_already_decoded_arguments_are_accepted(interpreter: ResponseInterpreter) -> None:
    raw = tool_reply(("call_1", "my_apple_save_memory", "{}"))
    raw["choices"][0]["message"]["tool_calls"][0]["function"]["arguments"] = {"content": "tea"}

    reply = interpreter.interpret(raw)

    assert reply.tool_calls[0].arguments == {"content": "tea"}


@pytest.mark.parametrize("arguments", [["x"], 42, True, 1.5])
def test_non_object_decoded_arguments_degrade_to_empty_mapping(
    interpreter: ResponseInterpreter, arguments
) -> None:
    raw = tool_reply(("call_1", "my_apple_save_memory", "{}"))
    raw["choices"][0]["message"]["tool_calls"][0]["function"]["arguments"] = arguments

    reply = interpreter.interpret(raw)

    assert reply.tool_calls[0].call_id == "call_1"
    assert reply.tool_calls[0].arguments == {}


def test_tool_call_without_name_is_dropped(interpreter: ResponseInterpreter) -> None:
    raw = tool_reply(("call_1", "", "{}"), ("call_2", "my_apple_recall_memory", "{}"))
    reply = interpreter.interpret(raw)
    assert [call.call_id for call in reply.tool_calls] == ["call_2"]


def test_missing_call_ids_are_synthesized_and_unique(interpreter: ResponseInterpreter) -> None:
    raw = tool_reply((None, "my_apple_recall_memory", "{}"), (None, "my_apple_recall_memory", "{}"))

    reply = interpreter.interpret(raw)

    first, second = (call.call_id for call in reply.tool_calls)
    assert first.startswith("call_") and second.startswith("call_")
    assert first != second
    assert [pending.call_id for pending in reply.pending_calls] == [first, second]


def test_reply_with_only_unnamed_tool_calls_is_malformed(interpreter: ResponseInterpreter) -> None:
    with pytest.raises(MalformedResponseError):
        interpreter.interpret(tool_reply(("call_1", "", "{}")))


def test_unnamed_tool_calls_beside_text_keep_the_text(interpreter: ResponseInterpreter) -> None:
    reply = interpreter.interpret(tool_reply(("call_1", "", "{}"), content="Here you go."))
    assert reply.text == "Here you go."
    assert reply.tool_calls == []


@pytest.mark.parametrize(
    "raw",
    [
        {},
        {"choices": []},
        {"choices": [{}]},
        {"choices": [{"message": "nope"}]},
        {"choices": "nope"},
        ["not", "an", "object"],
        None,
    ],
)
def test_missing_envelope_is_malformed(interpreter: ResponseInterpreter, raw) -> None:
    with pytest.raises(MalformedResponseError):
        interpreter.interpret(raw)


def test_decode_arguments_reports_reason() -> None:
    assert decode_arguments('{"content": "x"}') == ({"content": "x"}, None)
    arguments, error = decode_arguments("{oops")
    assert arguments == {}
    assert error is not None and error.startswith("invalid json")
