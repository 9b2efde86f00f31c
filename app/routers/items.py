import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import get_current_user_id
from app.core.db import get_session
from app.models.models import ClothingItem
from app.routers.outfits_helpers import item_out
from app.schemas.items import ItemCreate, ItemOut, ItemUpdate
from app.services import wardrobe

router = APIRouter(prefix="/items", tags=["items"])
logger = logging.getLogger("uvicorn.error")


@router.get("", response_model=List[ItemOut])
async def list_items(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    return [item_out(i) for i in await wardrobe.list_items(session, user_id)]


@router.post("", response_model=ItemOut)
async def create_item(
    payload: ItemCreate,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    item = ClothingItem(
        user_id=user_id,
        name=payload.name.strip(),
        type=payload.type,
        color=payload.color,
        material=payload.material,
        season_tags=wardrobe.clean_tags(payload.season_tags),
        occasion_tags=wardrobe.clean_tags(payload.occasion_tags),
        favorite=payload.favorite,
        times_worn=0,
        image_url=payload.image_url,
    )
    session.add(item)
    await session.commit()
    await session.refresh(item)
    logger.info("items:create user=%s item=%s", user_id, item.id)
    return item_out(item)


@router.get("/{item_id}", response_model=ItemOut)
async def get_item(
    item_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    item = await wardrobe.get_item(session, user_id, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="item_not_found")
    return item_out(item)


@router.patch("/{item_id}", response_model=ItemOut)
async def update_item(
    item_id: UUID,
    payload: ItemUpdate,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    item = await wardrobe.get_item(session, user_id, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="item_not_found")
    updates = payload.model_dump(exclude_unset=True)
    for tag_field in ("season_tags", "occasion_tags"):
        if tag_field in updates:
            updates[tag_field] = wardrobe.clean_tags(updates[tag_field])
    for field, value in updates.items():
        setattr(item, field, value)
    await session.commit()
    await session.refresh(item)
    return item_out(item)


@router.delete("/{item_id}")
async def delete_item(
    item_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    item = await wardrobe.get_item(session, user_id, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="item_not_found")
    await session.delete(item)
    await session.commit()
    return {"ok": True}
