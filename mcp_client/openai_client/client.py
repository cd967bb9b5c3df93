from __future__ import annotations

import json
from typing import Any, Dict, Optional

import httpx

from ..config import DEFAULT_BASE_URL
from ..errors import MalformedResponseError, MissingCredentialError, TransportError
from ..logging_config import logger
from ..models.wire import ProviderRequest

MISSING_KEY_MESSAGE = (
    "OpenAI API key is not configured. Set OPENAI_API_KEY in the environment or the .env file."
)


def _headers(api_key: str) -> Dict[str, str]:
    key = (api_key or "").strip()
    if not key:
        raise MissingCredentialError(MISSING_KEY_MESSAGE)

    return {
        "Authorization": f"Bearer {key}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


def _handle_response_error(exc: httpx.HTTPStatusError) -> None:
    response = exc.response
    detail: str
    try:
        payload = response.json()
        error = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(error, dict):
            detail = error.get("message") or json.dumps(error)
        else:
            detail = error or json.dumps(payload)
    except ValueError:
        detail = response.text
    raise TransportError(f"OpenAI request failed ({response.status_code}): {detail}") from exc


async def post_chat_completion(
    request: ProviderRequest,
    *,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = 60.0,
    client: Optional[httpx.AsyncClient] = None,
) -> Dict[str, Any]:
    """POST a chat completion request and return the decoded JSON reply."""

    url = f"{base_url.rstrip('/')}/chat/completions"
    payload = request.payload
    headers = _headers(request.api_key)
    body = payload.to_payload()

    logger.debug(
        "posting chat completion",
        extra={"model": payload.model, "messages": len(payload.messages), "tools": len(payload.tools)},
    )

    owns_client = client is None
    http = client or httpx.AsyncClient()
    try:
        response = await http.post(url, headers=headers, json=body, timeout=timeout)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            _handle_response_error(exc)
    except httpx.HTTPError as exc:
        raise TransportError(f"OpenAI request failed: {str(exc) or type(exc).__name__}") from exc
    finally:
        if owns_client:
            await http.aclose()

    try:
        return response.json()
    except ValueError as exc:
        raise MalformedResponseError("OpenAI reply was not valid JSON") from exc


__all__ = ["MISSING_KEY_MESSAGE", "post_chat_completion"]
