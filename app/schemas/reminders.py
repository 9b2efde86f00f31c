from pydantic import BaseModel
from typing import Optional, List


class ReminderOut(BaseModel):
    id: str
    reminder_type: str
    item_id: Optional[str] = None
    outfit_id: Optional[str] = None
    message: str
    priority: int
    expires_at: Optional[str] = None
    created_at: Optional[str] = None


class RemindersOut(BaseModel):
    items: List[ReminderOut]


class StyleSummaryOut(BaseModel):
    summary: str
    generated_at: str
    used_fallback: bool = False
    cached: bool = False
