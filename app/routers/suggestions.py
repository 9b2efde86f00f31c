import logging
import secrets
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import get_current_user_id
from app.core.config import settings
from app.core.dates import local_today
from app.core import db
from app.core.db import get_session
from app.models.models import DailySuggestion
from app.routers.outfits_helpers import suggestion_out
from app.schemas.suggestions import DailyRunOut, DailySuggestionOut, GenerateOut
from app.services import daily, wardrobe
from app.services.llm.types import LLMNotConfigured

router = APIRouter(prefix="/suggestions", tags=["suggestions"])
logger = logging.getLogger("uvicorn.error")


async def _owned(session: AsyncSession, user_id: str, suggestion_id: UUID) -> DailySuggestion:
    row = await session.get(DailySuggestion, suggestion_id)
    if row is None or row.user_id != user_id:
        raise HTTPException(status_code=404, detail="suggestion_not_found")
    return row


@router.get("/today", response_model=Optional[DailySuggestionOut])
async def today_suggestion(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    row = await wardrobe.get_suggestion(session, user_id, local_today())
    return suggestion_out(row) if row else None


@router.get("/history", response_model=List[DailySuggestionOut])
async def suggestion_history(
    limit: int = Query(7, ge=1, le=60),
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    return [suggestion_out(r) for r in await wardrobe.list_suggestions(session, user_id, limit)]


@router.post("/{suggestion_id}/viewed", response_model=DailySuggestionOut)
async def mark_viewed(
    suggestion_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    row = await _owned(session, user_id, suggestion_id)
    row.was_viewed = True
    await session.commit()
    await session.refresh(row)
    return suggestion_out(row)


@router.post("/{suggestion_id}/accepted", response_model=DailySuggestionOut)
async def mark_accepted(
    suggestion_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    row = await _owned(session, user_id, suggestion_id)
    row.was_viewed = True
    row.was_accepted = True
    await session.commit()
    await session.refresh(row)
    return suggestion_out(row)


@router.post("/generate", response_model=GenerateOut)
async def generate_now(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    if not settings.llm_configured:
        return GenerateOut(status="skipped")
    try:
        outcome = await daily.generate_for_user(session, user_id, replace=True)
    except LLMNotConfigured:
        await session.rollback()
        return GenerateOut(status="skipped")
    return GenerateOut(
        status=outcome.status,
        suggestion=suggestion_out(outcome.suggestion) if outcome.suggestion else None,
    )


@router.post("/daily/run", response_model=DailyRunOut)
async def run_daily(x_cron_secret: Optional[str] = Header(None)):
    if settings.CRON_SECRET and not secrets.compare_digest(x_cron_secret or "", settings.CRON_SECRET):
        raise HTTPException(status_code=401, detail="unauthorized")
    result = await daily.run_daily_suggestions(db.SessionLocal)
    return DailyRunOut(**result.model_dump())
