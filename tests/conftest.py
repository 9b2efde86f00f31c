import os

# settings are read at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_wardrobe.db"
os.environ["LLM_ENABLED"] = "false"
os.environ.pop("OPENAI_API_KEY", None)
os.environ.pop("CRON_SECRET", None)
os.environ["NOTIFY_PROVIDER"] = "log"

import httpx
import pytest
from asgi_lifespan import LifespanManager

from app.auth import deps as auth_deps
from app.core import db
from app.core.config import settings
from app.main import app
from app.models import models  # noqa: F401
from app.services import llm as llm_service


@pytest.fixture(autouse=True)
async def setup_db():
    async with db.engine.begin() as conn:
        await conn.run_sync(db.Base.metadata.drop_all)
        await conn.run_sync(db.Base.metadata.create_all)
    yield
    async with db.engine.begin() as conn:
        await conn.run_sync(db.Base.metadata.drop_all)
    await db.engine.dispose()


@pytest.fixture(autouse=True)
def override_auth():
    app.dependency_overrides[auth_deps.get_current_user_id] = lambda: "test-user"
    app.dependency_overrides[auth_deps.get_user_id_optional] = lambda: "test-user"
    yield
    app.dependency_overrides.pop(auth_deps.get_current_user_id, None)
    app.dependency_overrides.pop(auth_deps.get_user_id_optional, None)


@pytest.fixture(autouse=True)
def reset_llm():
    yield
    llm_service.set_provider(None)


@pytest.fixture
async def session():
    async with db.SessionLocal() as s:
        yield s


@pytest.fixture
async def client():
    async with LifespanManager(app):
        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
            yield ac


@pytest.fixture
def enable_llm(monkeypatch):
    """Turn the LLM on and install ``provider`` in place of OpenAI."""

    def _install(provider):
        monkeypatch.setattr(settings, "LLM_ENABLED", True)
        monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
        llm_service.set_provider(provider)
        return provider

    return _install


@pytest.fixture
def memory_cache(monkeypatch):
    store = {}

    async def _get(key):
        return store.get(key)

    async def _set(key, data, ttl):
        store[key] = data

    monkeypatch.setattr(llm_service, "cache_json_get", _get)
    monkeypatch.setattr(llm_service, "cache_json_set", _set)
    return store
