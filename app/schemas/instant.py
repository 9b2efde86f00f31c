from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List


class InstantOutfitIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    style_vibe: str = Field(min_length=1, max_length=50)
    occasion: str = Field(min_length=1, max_length=100)
    weather: str = Field(min_length=1, max_length=50)
    color_family: Optional[str] = Field(None, max_length=50)
    comfort_level: Optional[str] = Field(None, max_length=30)
    temperature: Optional[float] = None


class InstantOutfitOut(BaseModel):
    title: str
    items: List[str] = []
    reasoning: str = ""
    palette: List[str] = []
    do_not_wear: List[str] = []


class InstantMeta(BaseModel):
    model: str
    generated_at: str


class InstantOutfitsOut(BaseModel):
    outfits: List[InstantOutfitOut] = []
    meta: Optional[InstantMeta] = None
    used_fallback: bool = False
    skipped: bool = False
    limit_reached: bool = False
    generations_remaining: Optional[int] = None
