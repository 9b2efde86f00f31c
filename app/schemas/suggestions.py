from pydantic import BaseModel
from typing import Optional, List, Any, Dict


class DailySuggestionOut(BaseModel):
    id: str
    suggestion_date: str
    outfit_ids: List[str] = []
    reasoning: Optional[str] = None
    weather_context: Optional[Dict[str, Any]] = None
    used_fallback: bool = False
    was_viewed: bool = False
    was_accepted: bool = False
    created_at: Optional[str] = None


class GenerateOut(BaseModel):
    status: str
    suggestion: Optional[DailySuggestionOut] = None


class DailyRunOut(BaseModel):
    success: bool
    processed: int
    skipped: int
    errors: int
    reason: Optional[str] = None
