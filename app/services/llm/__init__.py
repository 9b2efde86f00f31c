from __future__ import annotations

import hashlib
import json
from typing import Any, Dict

from app.core.cache import cache_json_get, cache_json_set
from app.core.config import settings
from app.services.llm.providers.base import LLMProvider, NullProvider
from app.services.llm.providers.openai import OpenAIProvider
from app.services.llm.prompts import PROMPT_VERSION
from app.services.llm.types import (
    ChatInput,
    ChatOutput,
    DailyPickInput,
    DailyPickOutput,
    InstantOutfitsInput,
    InstantOutfitsOutput,
    LLMError,
    LLMNotConfigured,
    StyleSummaryInput,
    StyleSummaryOutput,
    TrendDiscoveryInput,
    TrendDiscoveryOutput,
)

__all__ = [
    "LLMError",
    "LLMNotConfigured",
    "chat_reply",
    "discover_trends",
    "generate_instant_outfits",
    "get_provider",
    "pick_daily_outfits",
    "set_provider",
    "summarize_style",
]

_provider: LLMProvider | None = None


def _hash_blob(data: Dict[str, Any]) -> str:
    return hashlib.sha256(json.dumps(data, sort_keys=True, default=str).encode()).hexdigest()


def get_provider() -> LLMProvider:
    global _provider
    if _provider:
        return _provider
    if not settings.llm_configured:
        return NullProvider()
    _provider = OpenAIProvider(settings.LLM_MODEL, settings.LLM_MODEL_TRENDS, api_key=settings.OPENAI_API_KEY)
    return _provider


def set_provider(provider: LLMProvider | None) -> None:
    global _provider
    _provider = provider


def _require_configured() -> LLMProvider:
    if not settings.llm_configured:
        raise LLMNotConfigured("llm disabled")
    return get_provider()


async def generate_instant_outfits(payload: InstantOutfitsInput) -> InstantOutfitsOutput:
    provider = _require_configured()
    return await provider.generate_instant_outfits(payload, timeout_ms=settings.LLM_TIMEOUT_MS)


async def pick_daily_outfits(payload: DailyPickInput) -> DailyPickOutput:
    provider = _require_configured()
    return await provider.pick_daily_outfits(payload, timeout_ms=settings.LLM_TIMEOUT_MS)


async def chat_reply(payload: ChatInput) -> ChatOutput:
    provider = _require_configured()
    return await provider.chat(payload, timeout_ms=settings.LLM_TIMEOUT_MS)


async def discover_trends(payload: TrendDiscoveryInput) -> TrendDiscoveryOutput:
    provider = _require_configured()
    return await provider.discover_trends(payload, timeout_ms=settings.LLM_TIMEOUT_MS)


async def summarize_style(payload: StyleSummaryInput) -> StyleSummaryOutput:
    payload.prompt_version = payload.prompt_version or PROMPT_VERSION
    provider = _require_configured()

    cache_key = f"llm:style:{payload.prompt_version}:{_hash_blob({'n': payload.name, 'c': payload.profile_context})}"
    cached = await cache_json_get(cache_key)
    if cached:
        out = StyleSummaryOutput.model_validate(cached)
        out.usage.cached = True
        out.usage.cache_key = cache_key
        return out

    out = await provider.summarize_style(payload, timeout_ms=settings.LLM_TIMEOUT_MS)
    out.usage.cached = False
    out.usage.cache_key = cache_key
    out.usage.prompt_version = payload.prompt_version
    await cache_json_set(cache_key, out.model_dump(), settings.LLM_CACHE_TTL_S)
    return out
