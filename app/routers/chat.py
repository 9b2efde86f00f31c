from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import get_current_user_id
from app.core.db import get_session
from app.schemas.chat import ChatIn, ChatOut, GuestChatIn, GuestChatOut
from app.services.chat import chat_as_guest, chat_with_stylist

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatOut)
async def chat(
    payload: ChatIn,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    return await chat_with_stylist(session, user_id, payload.messages)


@router.post("/guest", response_model=GuestChatOut)
async def guest_chat(payload: GuestChatIn):
    return await chat_as_guest(payload.messages, payload.quota)
