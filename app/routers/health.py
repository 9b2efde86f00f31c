from fastapi import APIRouter

from app.core.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    return {"ok": True, "env": settings.APP_ENV, "llm": settings.llm_configured}
