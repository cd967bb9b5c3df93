from __future__ import annotations

import json

import httpx
import pytest

from mcp_client.errors import MalformedResponseError, MissingCredentialError, TransportError
from mcp_client.models import Entry
from mcp_client.models.wire import ProviderRequest
from mcp_client.openai_client import post_chat_completion


def _request(builder, api_key: str = "sk-test") -> ProviderRequest:
    built = builder.build([Entry.user("hi")], [])
    return ProviderRequest(payload=built.payload, api_key=api_key)


@pytest.mark.asyncio
async def test_posts_json_with_bearer_auth(builder) -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "hello"}}]})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        reply = await post_chat_completion(
            _request(builder), base_url="https://api.example/v1/", client=client
        )

    assert reply["choices"][0]["message"]["content"] == "hello"
    assert seen["url"] == "https://api.example/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"]["model"] == "gpt-4o"
    assert seen["body"]["messages"][-1] == {"role": "user", "content": "hi"}


@pytest.mark.asyncio
async def test_http_error_carries_provider_message(builder) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"message": "Incorrect API key provided"}})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(TransportError) as excinfo:
            await post_chat_completion(_request(builder), client=client)

    assert "401" in str(excinfo.value)
    assert "Incorrect API key provided" in str(excinfo.value)


@pytest.mark.asyncio
async def test_network_error_becomes_transport_error(builder) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(TransportError, match="connection refused"):
            await post_chat_completion(_request(builder), client=client)


@pytest.mark.asyncio
async def test_non_json_body_is_malformed(builder) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway</html>")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(MalformedResponseError):
            await post_chat_completion(_request(builder), client=client)


@pytest.mark.asyncio
async def test_blank_key_never_hits_the_network(builder) -> None:
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover - must not run
        raise AssertionError("request should not be sent")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(MissingCredentialError):
            await post_chat_completion(_request(builder, api_key=""), client=client)
