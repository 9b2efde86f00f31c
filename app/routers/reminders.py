from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import get_current_user_id
from app.core.db import get_session
from app.routers.outfits_helpers import reminder_out
from app.schemas.reminders import RemindersOut
from app.services import reminders as reminder_service

router = APIRouter(prefix="/reminders", tags=["reminders"])


@router.get("", response_model=RemindersOut)
async def list_reminders(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    rows = await reminder_service.list_active(session, user_id)
    return RemindersOut(items=[reminder_out(r) for r in rows])


@router.post("/{reminder_id}/dismiss")
async def dismiss_reminder(
    reminder_id: UUID,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    if not await reminder_service.dismiss(session, user_id, reminder_id):
        raise HTTPException(status_code=404, detail="reminder_not_found")
    return {"ok": True}
