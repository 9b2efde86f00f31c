from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class LLMError(Exception):
    """Provider call failed, timed out or returned something unusable."""


class LLMNotConfigured(LLMError):
    """No provider is enabled; callers report a skipped result."""


class LLMUsage(BaseModel):
    model: str = ""
    tokens_in: int = 0
    tokens_out: int = 0
    latency_ms: int = 0
    cached: bool = False
    cache_key: Optional[str] = None
    prompt_version: str = "p1"


class InstantOutfit(BaseModel):
    title: str
    items: List[str] = Field(default_factory=list)
    reasoning: str = ""
    palette: List[str] = Field(default_factory=list)
    doNotWear: List[str] = Field(default_factory=list)


class InstantOutfitsInput(BaseModel):
    style_vibe: str
    occasion: str
    weather: str
    color_family: Optional[str] = None
    comfort_level: Optional[str] = None
    prompt_version: str = "p1"


class InstantOutfitsOutput(BaseModel):
    outfits: List[InstantOutfit] = Field(default_factory=list)
    usage: LLMUsage = Field(default_factory=LLMUsage)


class DailyCandidate(BaseModel):
    outfit_id: str
    name: str
    season_tags: List[str] = Field(default_factory=list)
    occasion_tags: List[str] = Field(default_factory=list)
    last_worn: Optional[str] = None


class DailyPickInput(BaseModel):
    weather: Dict[str, Any] = Field(default_factory=dict)
    favorite_styles: List[str] = Field(default_factory=list)
    trends: List[str] = Field(default_factory=list)
    candidates: List[DailyCandidate] = Field(default_factory=list)
    prompt_version: str = "p1"


class DailyPick(BaseModel):
    outfit_id: str
    reasoning: str = ""


class DailyPickOutput(BaseModel):
    outfits: List[DailyPick] = Field(default_factory=list)
    summary: str = ""
    usage: LLMUsage = Field(default_factory=LLMUsage)


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str = Field(max_length=4000)


class ChatInput(BaseModel):
    system: str
    messages: List[ChatMessage] = Field(default_factory=list)


class ChatOutput(BaseModel):
    reply: str = ""
    usage: LLMUsage = Field(default_factory=LLMUsage)


class StyleSummaryInput(BaseModel):
    name: str = "there"
    profile_context: str = ""
    prompt_version: str = "p1"


class StyleSummaryOutput(BaseModel):
    summary: str = ""
    usage: LLMUsage = Field(default_factory=LLMUsage)


class TrendOut(BaseModel):
    trend_name: str
    season: str
    description: Optional[str] = None
    colors: List[str] = Field(default_factory=list)
    key_pieces: List[str] = Field(default_factory=list)
    style_tags: List[str] = Field(default_factory=list)
    popularity_score: int = 0


class TrendDiscoveryInput(BaseModel):
    current_season: str
    next_season: str


class TrendDiscoveryOutput(BaseModel):
    trends: List[TrendOut] = Field(default_factory=list)
    usage: LLMUsage = Field(default_factory=LLMUsage)
