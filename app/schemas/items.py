from pydantic import BaseModel, Field
from typing import Optional, List


class ItemCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    type: Optional[str] = Field(None, max_length=64)
    color: Optional[str] = Field(None, max_length=64)
    material: Optional[str] = Field(None, max_length=128)
    season_tags: Optional[List[str]] = None
    occasion_tags: Optional[List[str]] = None
    favorite: bool = False
    image_url: Optional[str] = None


class ItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[str] = Field(None, max_length=64)
    color: Optional[str] = Field(None, max_length=64)
    material: Optional[str] = Field(None, max_length=128)
    season_tags: Optional[List[str]] = None
    occasion_tags: Optional[List[str]] = None
    favorite: Optional[bool] = None
    image_url: Optional[str] = None


class ItemOut(BaseModel):
    id: str
    name: str
    type: Optional[str] = None
    color: Optional[str] = None
    material: Optional[str] = None
    season_tags: List[str] = []
    occasion_tags: List[str] = []
    favorite: bool = False
    times_worn: int = 0
    last_worn_at: Optional[str] = None
    image_url: Optional[str] = None
    created_at: Optional[str] = None
