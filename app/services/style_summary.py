from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List

from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.reminders import StyleSummaryOut
from app.services import llm as llm_service
from app.services import wardrobe
from app.services.llm.types import LLMError, StyleSummaryInput

logger = logging.getLogger("uvicorn.error")

# quiz_derived keys and the label each one gets in the profile
QUIZ_FIELDS = (
    ("styleType", "Style Type"),
    ("lifestyleType", "Lifestyle"),
    ("vibeProfile", "Vibe"),
    ("styleHistory", "Era Influence"),
)


def profile_context(preferences: Any) -> str:
    if preferences is None:
        return ""
    lines: List[str] = []
    quiz = preferences.quiz_derived or {}
    for key, label in QUIZ_FIELDS:
        if quiz.get(key):
            lines.append(f"- {label}: {quiz[key]}")
    if preferences.favorite_colors:
        lines.append(f"- Favorite Colors: {', '.join(preferences.favorite_colors)}")
    if preferences.favorite_styles:
        lines.append(f"- Favorite Styles: {', '.join(preferences.favorite_styles)}")
    if preferences.personality_tags:
        lines.append(f"- Personality: {', '.join(preferences.personality_tags)}")
    if not lines:
        return ""
    return "Derived Style Profile:\n" + "\n".join(lines)


def fallback_summary(name: str, preferences: Any) -> str:
    styles = list((preferences.favorite_styles if preferences else None) or [])
    if styles:
        return (
            f"Hi {name}! Your style leans {', '.join(styles[:3])}, and I'll keep that front and centre "
            "when I pick outfits for you."
        )
    return (
        f"Hi {name}! Take a style quiz or two and I'll put together a profile that shapes every "
        "outfit I suggest."
    )


async def style_summary(session: AsyncSession, user_id: str) -> StyleSummaryOut:
    prefs = await wardrobe.get_preferences(session, user_id)
    account = await wardrobe.get_account(session, user_id)
    name = (account.first_name if account else None) or "there"
    now = datetime.now(timezone.utc).isoformat()
    try:
        out = await llm_service.summarize_style(StyleSummaryInput(name=name, profile_context=profile_context(prefs)))
    except LLMError as exc:
        logger.warning("generation:fallback site=style_summary user=%s reason=%s", user_id, exc)
        return StyleSummaryOut(summary=fallback_summary(name, prefs), generated_at=now, used_fallback=True)
    return StyleSummaryOut(summary=out.summary, generated_at=now, cached=out.usage.cached)
