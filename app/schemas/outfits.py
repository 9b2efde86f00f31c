from pydantic import BaseModel, Field
from typing import Optional, List, Literal


class OutfitCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    item_ids: List[str] = Field(default_factory=list)
    season_tags: Optional[List[str]] = None
    occasion_tags: Optional[List[str]] = None
    favorite: bool = False
    source: Optional[str] = None


class OutfitFavoriteIn(BaseModel):
    favorite: bool


class OutfitOut(BaseModel):
    id: str
    name: str
    item_ids: List[str] = []
    season_tags: List[str] = []
    occasion_tags: List[str] = []
    favorite: bool = False
    times_worn: int = 0
    last_worn_at: Optional[str] = None
    source: Optional[str] = None
    created_at: Optional[str] = None


class WearLogIn(BaseModel):
    worn_date: Optional[str] = None
    time_of_day: Optional[Literal["morning", "afternoon", "evening", "night"]] = None
    weather_condition: Optional[str] = Field(None, max_length=100)
    temperature: Optional[float] = None
    activity: Optional[str] = Field(None, max_length=200)
    notes: Optional[str] = Field(None, max_length=1000)


class WearLogOut(BaseModel):
    id: str
    outfit_id: str
    worn_date: str
    time_of_day: Optional[str] = None
    weather_condition: Optional[str] = None
    temperature: Optional[float] = None
    activity: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
