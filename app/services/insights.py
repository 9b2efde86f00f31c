from __future__ import annotations

from collections import Counter
from typing import Any, Iterable, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.models import LearningDatum

NEW_USER_INSIGHT = "User is new - no patterns detected yet. Building initial style profile..."

ANALYSIS_WINDOW = 50
CHAT_WINDOW = 20

MIN_LIKED_STYLE = 3
MIN_COLOR_MENTIONS = 5
MIN_TEMPERATURE_SAMPLES = 5
MIN_OCCASIONS = 3
MIN_REJECTIONS = 3
MIN_RATINGS = 5


async def load_recent_learning(session: AsyncSession, user_id: str, limit: int = ANALYSIS_WINDOW) -> List[LearningDatum]:
    """Most recent learning rows first."""
    res = await session.execute(
        select(LearningDatum)
        .where(LearningDatum.user_id == user_id)
        .order_by(LearningDatum.created_at.desc(), LearningDatum.id.desc())
        .limit(limit)
    )
    return list(res.scalars().all())


def _outfit(row: Any) -> dict:
    data = getattr(row, "outfit_data", None)
    return data if isinstance(data, dict) else {}


def _context(row: Any) -> dict:
    data = getattr(row, "context", None)
    return data if isinstance(data, dict) else {}


def _rating(row: Any) -> Optional[int]:
    return getattr(row, "rating", None)


def _liked(row: Any) -> bool:
    rating = _rating(row)
    return rating is not None and rating >= 4


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _style(row: Any) -> Optional[str]:
    return _text(_outfit(row).get("style"))


def _occasion(row: Any) -> Optional[str]:
    return _text(_context(row).get("occasion"))


def _colors(row: Any) -> List[str]:
    """Colour names from a row; a bare string counts as one colour."""
    raw = _outfit(row).get("colors")
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        return []
    return [c for c in (_text(v) for v in raw) if c]


def _top(values: Iterable[Any], n: int = 1) -> list[tuple[Any, int]]:
    # Counter.most_common keeps insertion order among equal counts
    return Counter(v for v in values if v).most_common(n)


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def analyze_patterns(rows: Sequence[Any]) -> List[str]:
    """Turn a most-recent-first window of learning rows into insight sentences.

    Each category contributes at most one sentence and only when its sample
    size clears the category minimum. Ties go to the value seen first.
    """
    if not rows:
        return [NEW_USER_INSIGHT]

    insights: List[str] = []

    liked_ratings = [r for r in rows if r.interaction_type == "outfit_rating" and _liked(r)]
    if len(liked_ratings) >= MIN_LIKED_STYLE:
        top = _top(_style(r) for r in liked_ratings)
        if top:
            style, n = top[0]
            insights.append(f"User consistently rates {style} outfits highly ({n} times)")

    colors = [c for r in rows if _liked(r) for c in _colors(r)]
    if len(colors) >= MIN_COLOR_MENTIONS:
        top_colors = [c for c, _ in _top(colors, 2)]
        if top_colors:
            insights.append(f"User prefers outfits with {' and '.join(top_colors)} colors")

    temps = [_context(r).get("temperature") for r in rows if _liked(r) and _context(r).get("temperature")]
    if len(temps) >= MIN_TEMPERATURE_SAMPLES:
        avg_temp = sum(_as_float(t) for t in temps) / len(temps)
        if avg_temp > 20:
            insights.append(f"User enjoys lighter, breathable outfits in warm weather (avg {avg_temp:.0f}°C)")
        elif avg_temp < 15:
            insights.append(f"User prefers layered, cozy outfits in cooler weather (avg {avg_temp:.0f}°C)")

    occasions = [o for o in (_occasion(r) for r in rows if _liked(r)) if o]
    if len(occasions) >= MIN_OCCASIONS:
        top = _top(occasions)
        if top:
            insights.append(f"User frequently rates {top[0][0]} outfits highly")

    rejected = [r for r in rows if r.interaction_type == "outfit_rejected" or _rating(r) == 1]
    if len(rejected) >= MIN_REJECTIONS:
        top = _top(_style(r) for r in rejected)
        if top:
            insights.append(f"User tends to avoid {top[0][0]} style outfits")

    ratings = [r for r in rows if r.interaction_type == "outfit_rating"]
    if len(ratings) >= MIN_RATINGS:
        avg = sum(_rating(r) or 0 for r in ratings) / len(ratings)
        if avg >= 4:
            insights.append(f"User is highly satisfied with outfit suggestions ({avg:.1f}/5 avg rating)")
        elif avg < 3:
            insights.append("User preferences are still being learned - adapting recommendations")

    return insights


def learned_preferences_block(rows: Sequence[Any]) -> Optional[str]:
    """Short learned-preferences section for the chat persona prompt."""
    if not rows:
        return None
    lines = ["=== LEARNED PREFERENCES ==="]
    liked = [r for r in rows if _liked(r)]
    if liked:
        styles = list(dict.fromkeys(s for s in (_style(r) for r in liked) if s))
        colors = list(dict.fromkeys(c for r in liked for c in _colors(r)))
        if styles:
            lines.append(f"User loves: {', '.join(styles[:3])} styles")
        if colors:
            lines.append(f"Favorite color combinations: {', '.join(colors[:3])}")
    feedback = [r.feedback_text for r in rows if getattr(r, "feedback_text", None)][:3]
    if feedback:
        lines.append('Recent feedback: "' + '"; "'.join(feedback) + '"')
    lines.append(f"Total interactions tracked: {len(rows)}")
    return "\n".join(lines)
