from pydantic import BaseModel, Field
from typing import Optional, List, Any, Dict


class PreferencesIn(BaseModel):
    favorite_colors: Optional[List[str]] = None
    favorite_styles: Optional[List[str]] = None
    personality_tags: Optional[List[str]] = None
    quiz_derived: Optional[Dict[str, Any]] = None
    preferred_city: Optional[str] = Field(None, max_length=100)
    preferred_country: Optional[str] = Field(None, max_length=100)
    reminder_enabled: Optional[bool] = None


class PreferencesOut(BaseModel):
    favorite_colors: List[str] = []
    favorite_styles: List[str] = []
    personality_tags: List[str] = []
    quiz_derived: Optional[Dict[str, Any]] = None
    preferred_city: Optional[str] = None
    preferred_country: Optional[str] = None
    reminder_enabled: bool = False
