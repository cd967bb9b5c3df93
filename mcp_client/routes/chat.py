from typing import Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..models import ChatEntry, ChatHistoryResponse, ChatSendRequest, ChatSendResponse
from ..services.conversation.chat_handler import handle_chat_request
from ..services.conversation.session import ChatSession, get_chat_session

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("/send", response_model=ChatSendResponse, summary="Submit a chat message and run one turn")
# Handle incoming chat messages and route them to the chat agent runtime
async def chat_send(
    payload: ChatSendRequest,
    session: ChatSession = Depends(get_chat_session),
) -> Union[ChatSendResponse, JSONResponse]:
    return await handle_chat_request(payload, session)


@router.get("/history", response_model=ChatHistoryResponse)
# Return the user-visible conversation in insertion order
def chat_history(session: ChatSession = Depends(get_chat_session)) -> ChatHistoryResponse:
    return ChatHistoryResponse(
        messages=[ChatEntry.from_entry(entry) for entry in session.history.window_for_display()]
    )


__all__ = ["router"]
