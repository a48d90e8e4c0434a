"""
User/therapist chat.

A chat exists between a user and a therapist once the therapist has
accepted the user's request. Its id is ``"{user_id}-{therapist_id}"``.

Messages are exchanged over REST or over a WebSocket that pushes new
messages as they are stored.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime

from fastapi import (
    APIRouter,
    HTTPException,
    Query,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from pydantic import BaseModel, Field

from mindpal.core.auth import CurrentUserId, decode_user_id
from mindpal.core.config import settings
from mindpal.core.deps import SupabaseDep
from mindpal.models.schemas import ChatMessage
from mindpal.services.supabase_service import SupabaseService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chats", tags=["chats"])


class SendMessageRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=5000)


@dataclass
class ChatParties:
    user_id: str
    therapist_id: str
    caller_id: str

    @property
    def other_id(self) -> str:
        return self.therapist_id if self.caller_id == self.user_id else self.user_id


class MessageCursor:
    """
    Remembers what a socket has delivered.

    Polls from the timestamp of the last delivered message inclusive and
    skips the ids already sent at that timestamp, so messages stored in the
    same instant are neither lost nor repeated.
    """

    def __init__(self) -> None:
        self.last_seen: datetime | None = None
        self.sent_at_last_seen: set[str] = set()

    async def pull(self, supabase_service: SupabaseService, chat_id: str) -> list[ChatMessage]:
        since = self.last_seen.isoformat() if self.last_seen else None
        fresh: list[ChatMessage] = []

        for message in await supabase_service.list_messages(chat_id, since=since):
            if message.id in self.sent_at_last_seen:
                continue
            if message.created_at != self.last_seen:
                self.last_seen = message.created_at
                self.sent_at_last_seen = set()
            self.sent_at_last_seen.add(message.id)
            fresh.append(message)

        return fresh


async def receive_text_frame(websocket: WebSocket) -> str | None:
    """Next client frame as text; binary frames come back as None."""
    message = await websocket.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", status.WS_1000_NORMAL_CLOSURE))
    return message.get("text")


async def resolve_chat(
    supabase_service: SupabaseService, chat_id: str, caller_id: str
) -> ChatParties:
    """
    Work out who is in a chat and check the caller may use it.

    Raises:
        HTTPException: 403 unless the caller is one of the two parties and
            the therapist has accepted the user's request
    """
    if chat_id.startswith(f"{caller_id}-"):
        parties = ChatParties(
            user_id=caller_id, therapist_id=chat_id[len(caller_id) + 1:], caller_id=caller_id
        )
    elif chat_id.endswith(f"-{caller_id}"):
        parties = ChatParties(
            user_id=chat_id[: -len(caller_id) - 1], therapist_id=caller_id, caller_id=caller_id
        )
    else:
        raise HTTPException(status_code=403, detail="You are not part of this chat")

    accepted = await supabase_service.find_request(
        parties.user_id, parties.therapist_id, ["accepted"]
    )
    if not accepted:
        raise HTTPException(status_code=403, detail="Chat is not open")

    return parties


@router.get("/{chat_id}/messages", response_model=list[ChatMessage])
async def list_messages(
    chat_id: str,
    user_id: CurrentUserId,
    supabase_service: SupabaseDep,
    after: str | None = Query(None, description="Only messages newer than this timestamp"),
) -> list[ChatMessage]:
    """Chat history, oldest first."""
    try:
        await resolve_chat(supabase_service, chat_id, user_id)
        return await supabase_service.list_messages(chat_id, after=after)

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to load messages: {str(e)}")


@router.post("/{chat_id}/messages", response_model=ChatMessage)
async def send_message(
    chat_id: str,
    request: SendMessageRequest,
    user_id: CurrentUserId,
    supabase_service: SupabaseDep,
) -> ChatMessage:
    """Send a message to the other party."""
    text = request.message.strip()
    if not text:
        raise HTTPException(status_code=400, detail="Message is required")

    try:
        parties = await resolve_chat(supabase_service, chat_id, user_id)
        return await supabase_service.create_message(chat_id, user_id, parties.other_id, text)

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to send message: {str(e)}")


@router.websocket("/{chat_id}/ws")
async def chat_socket(
    websocket: WebSocket,
    chat_id: str,
    supabase_service: SupabaseDep,
    token: str = Query(...),
) -> None:
    """
    Live chat.

    On connect the history is sent, then every new message in the chat is
    pushed as JSON. Text received from the client is stored as a message
    from the caller; binary frames are ignored. Browsers can't set headers
    on a WebSocket, so the access token comes in the ``token`` query
    parameter.
    """
    try:
        user_id = decode_user_id(token)
        parties = await resolve_chat(supabase_service, chat_id, user_id)
    except HTTPException as e:
        logger.warning(f"⚠️  Chat socket refused for {chat_id}: {e.detail}")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    logger.info(f"💬 {user_id} joined chat {chat_id}")

    cursor = MessageCursor()

    async def push_new_messages() -> None:
        for message in await cursor.pull(supabase_service, chat_id):
            await websocket.send_json(message.model_dump(mode="json"))

    try:
        await push_new_messages()

        while True:
            try:
                text = await asyncio.wait_for(
                    receive_text_frame(websocket), timeout=settings.chat_poll_interval
                )
            except asyncio.TimeoutError:
                text = None

            if text and text.strip():
                await supabase_service.create_message(
                    chat_id, user_id, parties.other_id, text.strip()
                )

            await push_new_messages()

    except WebSocketDisconnect:
        logger.info(f"👋 {user_id} left chat {chat_id}")
