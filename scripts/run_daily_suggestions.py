from __future__ import annotations

import argparse
import asyncio
import json
from datetime import date

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker

from app.core.config import settings
from app.services.daily import run_daily_suggestions


async def _run(day: date | None) -> dict:
    engine = create_async_engine(settings.DATABASE_URL, echo=False)
    Session = async_sessionmaker(engine, expire_on_commit=False)
    try:
        result = await run_daily_suggestions(Session, today=day)
    finally:
        await engine.dispose()
    return result.model_dump()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate today's outfit suggestions for opted-in users.")
    parser.add_argument("--date", type=date.fromisoformat, default=None, help="override the run date (YYYY-MM-DD)")
    args = parser.parse_args()
    print(json.dumps(asyncio.run(_run(args.date))))
