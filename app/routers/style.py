from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import get_current_user_id
from app.core.db import get_session
from app.schemas.reminders import StyleSummaryOut
from app.services.style_summary import style_summary

router = APIRouter(prefix="/style", tags=["style"])


@router.get("/summary", response_model=StyleSummaryOut)
async def get_style_summary(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    return await style_summary(session, user_id)
