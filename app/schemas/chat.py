from pydantic import BaseModel, Field
from typing import Optional, List

from app.services.llm.types import ChatMessage


class ChatIn(BaseModel):
    messages: List[ChatMessage] = Field(min_length=1, max_length=50)


class GuestQuotaState(BaseModel):
    count: int = 0
    date: Optional[str] = None


class GuestChatIn(ChatIn):
    quota: Optional[GuestQuotaState] = None


class ChatOut(BaseModel):
    reply: Optional[str] = None
    message_count: int = 0
    limit_reached: bool = False
    remaining: Optional[int] = None
    used_fallback: bool = False
    skipped: bool = False


class GuestChatOut(ChatOut):
    quota: GuestQuotaState
