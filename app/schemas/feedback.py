import json
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Literal, Any, Dict

MAX_BLOB_BYTES = 50 * 1024

InteractionType = Literal[
    "outfit_suggested",
    "outfit_accepted",
    "outfit_rejected",
    "outfit_rating",
    "feedback_given",
    "rating_given",
    "item_swapped",
    "chat",
]


class FeedbackIn(BaseModel):
    interaction_type: InteractionType
    rating: Optional[int] = Field(None, ge=1, le=5, strict=True)
    feedback_text: Optional[str] = Field(None, max_length=1000)
    outfit_data: Optional[Dict[str, Any]] = None
    context: Optional[Dict[str, Any]] = None
    was_successful: Optional[bool] = None

    @field_validator("feedback_text")
    @classmethod
    def _strip(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else None

    @field_validator("outfit_data", "context")
    @classmethod
    def _size(cls, v: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if v is not None and len(json.dumps(v, default=str)) > MAX_BLOB_BYTES:
            raise ValueError("too large (max 50KB)")
        return v


class FeedbackOut(BaseModel):
    id: str
    created_at: Optional[str] = None


class InsightsOut(BaseModel):
    insights: List[str]
    pattern_count: int
    analysis_date: str
