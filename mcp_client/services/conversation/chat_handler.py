from typing import Union

from fastapi import status
from fastapi.responses import JSONResponse

from ...errors import TurnInProgressError
from ...logging_config import logger
from ...models import ChatEntry, ChatSendRequest, ChatSendResponse
from ...utils import error_response
from .session import ChatSession


# Run one chat turn for the submitted message and report its terminal state
async def handle_chat_request(
    payload: ChatSendRequest, session: ChatSession
) -> Union[ChatSendResponse, JSONResponse]:
    """Handle a chat request using the session's ChatAgentRuntime."""

    user_content = payload.message.strip()
    if not user_content:
        return error_response("Missing user message", status_code=status.HTTP_400_BAD_REQUEST)

    logger.info("chat request", extra={"message_length": len(user_content)})

    try:
        result = await session.runtime.execute(user_content)
    except TurnInProgressError as exc:
        return error_response(str(exc), status_code=status.HTTP_409_CONFLICT)

    return ChatSendResponse(
        ok=result.success,
        status=result.status.value,
        text=result.text,
        error=result.error,
        entries=[ChatEntry.from_entry(entry) for entry in result.entries],
    )
