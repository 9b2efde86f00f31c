import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import get_current_user_id
from app.core.dates import local_now
from app.core.db import get_session
from app.models.models import LearningDatum
from app.routers.outfits_helpers import iso_or_none
from app.schemas.feedback import FeedbackIn, FeedbackOut, InsightsOut
from app.services.insights import ANALYSIS_WINDOW, analyze_patterns, load_recent_learning

router = APIRouter(tags=["feedback"])
logger = logging.getLogger("uvicorn.error")


@router.post("/feedback", response_model=FeedbackOut)
async def submit_feedback(
    payload: FeedbackIn,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    row = LearningDatum(user_id=user_id, **payload.model_dump())
    session.add(row)
    await session.commit()
    await session.refresh(row)
    logger.info("feedback:stored user=%s type=%s rating=%s", user_id, row.interaction_type, row.rating)
    return FeedbackOut(id=str(row.id), created_at=iso_or_none(row.created_at))


@router.get("/insights", response_model=InsightsOut)
async def insights(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    rows = await load_recent_learning(session, user_id, ANALYSIS_WINDOW)
    found = analyze_patterns(rows)
    return InsightsOut(
        insights=found,
        pattern_count=len(rows),
        analysis_date=local_now().isoformat(),
    )
