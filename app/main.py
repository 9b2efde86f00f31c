import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.core.cache import close_redis
from app.core.config import settings
from app.routers import chat, feedback, health, items, outfits, preferences, reminders, style, suggestions, weather


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_redis()


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# CORS
origins = settings.cors_origin_list
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

prefix = settings.API_PREFIX
app.include_router(health.router, prefix=prefix)
app.include_router(items.router, prefix=prefix)
app.include_router(outfits.router, prefix=prefix)
app.include_router(preferences.router, prefix=prefix)
app.include_router(suggestions.router, prefix=prefix)
app.include_router(chat.router, prefix=prefix)
app.include_router(feedback.router, prefix=prefix)
app.include_router(reminders.router, prefix=prefix)
app.include_router(style.router, prefix=prefix)
app.include_router(weather.router, prefix=prefix)

logger = logging.getLogger("app.requests")

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    logger.info("%s %s %s %.1fms", request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.get("/")
async def root():
    return {"name": settings.APP_NAME, "env": settings.APP_ENV, "prefix": settings.API_PREFIX}
