from .celery_app import celery
import asyncio
import logging

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker

from app.core.config import settings
from app.services.daily import run_daily_suggestions
from app.services.reminders import cleanup_expired
from app.services.trends import sync_fashion_trends as sync_trends

logger = logging.getLogger("uvicorn.error")


def _session_factory():
    engine = create_async_engine(settings.DATABASE_URL, echo=False)
    return engine, async_sessionmaker(engine, expire_on_commit=False)


@celery.task(name="tasks.generate_daily_suggestions")
def generate_daily_suggestions() -> dict:
    """Write today's suggestion for every owner with reminders switched on."""

    async def _run() -> dict:
        engine, Session = _session_factory()
        try:
            result = await run_daily_suggestions(Session)
        finally:
            await engine.dispose()
        return result.model_dump()

    return asyncio.run(_run())


@celery.task(name="tasks.sync_fashion_trends")
def sync_fashion_trends() -> dict:
    async def _run() -> dict:
        engine, Session = _session_factory()
        try:
            async with Session() as session:
                return await sync_trends(session)
        finally:
            await engine.dispose()

    return asyncio.run(_run())


@celery.task(name="tasks.cleanup_reminders")
def cleanup_reminders() -> dict:
    """Delete dismissed and expired reminders."""

    async def _run() -> dict:
        engine, Session = _session_factory()
        try:
            async with Session() as session:
                deleted = await cleanup_expired(session)
        finally:
            await engine.dispose()
        logger.info("reminders:cleanup deleted=%s", deleted)
        return {"ok": True, "deleted": deleted}

    return asyncio.run(_run())
