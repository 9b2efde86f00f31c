import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import get_current_user_id, get_user_id_optional
from app.core.dates import local_today
from app.core.db import get_session
from app.models.models import Outfit as OutfitModel, OutfitLog
from app.routers.outfits_helpers import outfit_out, wear_log_out
from app.schemas.instant import InstantOutfitIn, InstantOutfitsOut
from app.schemas.outfits import OutfitCreate, OutfitFavoriteIn, OutfitOut, WearLogIn, WearLogOut
from app.services import wardrobe
from app.services.instant import generate_instant_outfits

router = APIRouter(prefix="/outfits", tags=["outfits"])
logger = logging.getLogger("uvicorn.error")


@router.post("/instant", response_model=InstantOutfitsOut)
async def instant_outfits(
    payload: InstantOutfitIn,
    session: AsyncSession = Depends(get_session),
    user_id: Optional[str] = Depends(get_user_id_optional),
):
    return await generate_instant_outfits(session, user_id, payload)


@router.get("", response_model=List[OutfitOut])
async def list_outfits(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    return [outfit_out(o) for o in await wardrobe.list_outfits(session, user_id)]


@router.post("", response_model=OutfitOut)
async def create_outfit(
    payload: OutfitCreate,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    owned = await wardrobe.owned_item_ids(session, user_id, payload.item_ids)
    item_ids: List[str] = []
    for raw in payload.item_ids:
        parsed = wardrobe.parse_uuid(raw)
        if parsed is None or str(parsed) not in owned:
            raise HTTPException(status_code=400, detail="invalid_item_ids")
        if str(parsed) not in item_ids:
            item_ids.append(str(parsed))
    outfit = OutfitModel(
        user_id=user_id,
        name=payload.name.strip(),
        item_ids=item_ids,
        season_tags=wardrobe.clean_tags(payload.season_tags),
        occasion_tags=wardrobe.clean_tags(payload.occasion_tags),
        favorite=payload.favorite,
        times_worn=0,
        source=payload.source or "user",
    )
    session.add(outfit)
    await session.commit()
    await session.refresh(outfit)
    return outfit_out(outfit)


@router.get("/{outfit_id}", response_model=OutfitOut)
async def get_outfit(
    outfit_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    outfit = await wardrobe.get_outfit(session, user_id, outfit_id)
    if not outfit:
        raise HTTPException(status_code=404, detail="outfit_not_found")
    return outfit_out(outfit)


@router.put("/{outfit_id}/favorite", response_model=OutfitOut)
async def set_favorite(
    outfit_id: UUID,
    payload: OutfitFavoriteIn,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    outfit = await wardrobe.get_outfit(session, user_id, outfit_id)
    if not outfit:
        raise HTTPException(status_code=404, detail="outfit_not_found")
    outfit.favorite = payload.favorite
    await session.commit()
    await session.refresh(outfit)
    return outfit_out(outfit)


@router.delete("/{outfit_id}")
async def delete_outfit(
    outfit_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    outfit = await wardrobe.get_outfit(session, user_id, outfit_id)
    if not outfit:
        raise HTTPException(status_code=404, detail="outfit_not_found")
    await session.delete(outfit)
    await session.commit()
    return {"ok": True}


@router.post("/{outfit_id}/wear-log", response_model=WearLogOut)
async def log_wear(
    outfit_id: UUID,
    payload: WearLogIn,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    outfit = await wardrobe.get_outfit(session, user_id, outfit_id)
    if not outfit:
        raise HTTPException(status_code=404, detail="outfit_not_found")
    if payload.worn_date:
        try:
            worn_date = date.fromisoformat(payload.worn_date)
        except ValueError as e:
            raise HTTPException(status_code=400, detail="invalid_worn_date") from e
    else:
        worn_date = local_today()
    entry = await wardrobe.log_wear(
        session,
        outfit,
        worn_date,
        time_of_day=payload.time_of_day,
        weather_condition=payload.weather_condition,
        temperature=payload.temperature,
        activity=payload.activity,
        notes=payload.notes,
    )
    logger.info("outfits:wear user=%s outfit=%s date=%s", user_id, outfit_id, worn_date)
    return wear_log_out(entry)


@router.get("/{outfit_id}/history", response_model=List[WearLogOut])
async def wear_history(
    outfit_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    outfit = await wardrobe.get_outfit(session, user_id, outfit_id)
    if not outfit:
        raise HTTPException(status_code=404, detail="outfit_not_found")
    res = await session.execute(
        select(OutfitLog)
        .where(OutfitLog.user_id == user_id, OutfitLog.outfit_id == outfit.id)
        .order_by(OutfitLog.worn_date.desc(), OutfitLog.created_at.desc())
    )
    return [wear_log_out(l) for l in res.scalars().all()]
