from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.deps import get_current_user_id
from app.core.db import get_session
from app.models.models import UserPreferences
from app.schemas.preferences import PreferencesIn, PreferencesOut
from app.services import wardrobe

router = APIRouter(prefix="/preferences", tags=["preferences"])


def _prefs_out(p: UserPreferences | None) -> PreferencesOut:
    if p is None:
        return PreferencesOut()
    return PreferencesOut(
        favorite_colors=list(p.favorite_colors or []),
        favorite_styles=list(p.favorite_styles or []),
        personality_tags=list(p.personality_tags or []),
        quiz_derived=p.quiz_derived,
        preferred_city=p.preferred_city,
        preferred_country=p.preferred_country,
        reminder_enabled=bool(p.reminder_enabled),
    )


@router.get("", response_model=PreferencesOut)
async def get_preferences(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    return _prefs_out(await wardrobe.get_preferences(session, user_id))


@router.put("", response_model=PreferencesOut)
async def put_preferences(
    payload: PreferencesIn,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    await wardrobe.ensure_account(session, user_id)
    prefs = await wardrobe.get_preferences(session, user_id)
    if prefs is None:
        prefs = UserPreferences(user_id=user_id, reminder_enabled=False)
        session.add(prefs)

    data = payload.model_dump(exclude_unset=True)
    for key in ("favorite_colors", "favorite_styles", "personality_tags"):
        if key in data:
            setattr(prefs, key, wardrobe.clean_tags(data.pop(key)))
    for key in ("preferred_city", "preferred_country"):
        if key in data:
            val = (data.pop(key) or "").strip()
            setattr(prefs, key, val or None)
    for key, val in data.items():
        if val is not None or key == "quiz_derived":
            setattr(prefs, key, val)

    await session.commit()
    await session.refresh(prefs)
    return _prefs_out(prefs)
