from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any, Dict, List

from openai import AsyncOpenAI, OpenAIError

from app.services.llm.types import (
    ChatInput,
    ChatOutput,
    DailyPick,
    DailyPickInput,
    DailyPickOutput,
    InstantOutfit,
    InstantOutfitsInput,
    InstantOutfitsOutput,
    LLMError,
    LLMUsage,
    StyleSummaryInput,
    StyleSummaryOutput,
    TrendDiscoveryInput,
    TrendDiscoveryOutput,
    TrendOut,
)
from app.services.llm.prompts import (
    build_chat_prompt,
    build_daily_prompt,
    build_instant_prompt,
    build_style_summary_prompt,
    build_trends_prompt,
)

logger = logging.getLogger("uvicorn.error")

CHAT_FALLBACK_REPLY = "I'm sorry, I couldn't generate a response."


class OpenAIProvider:
    name = "openai"

    def __init__(self, model: str, model_trends: str, api_key: str | None = None):
        self.client = AsyncOpenAI(api_key=api_key)
        self.model = model
        self.model_trends = model_trends

    async def _chat(
        self,
        messages: List[Dict[str, Any]],
        model: str,
        timeout_ms: int,
        *,
        temperature: float,
        max_tokens: int,
        json_mode: bool = True,
    ) -> Dict[str, Any]:
        start = time.perf_counter()
        logger.info("llm:openai request model=%s timeout_ms=%s", model, timeout_ms)
        kwargs: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        try:
            resp = await asyncio.wait_for(
                self.client.chat.completions.create(**kwargs),
                timeout=timeout_ms / 1000.0,
            )
        except asyncio.TimeoutError as exc:
            logger.warning("llm:openai timeout model=%s timeout_ms=%s", model, timeout_ms)
            raise LLMError("timeout") from exc
        except OpenAIError as exc:
            logger.warning("llm:openai error model=%s err=%s", model, exc)
            raise LLMError(str(exc)) from exc
        latency_ms = int((time.perf_counter() - start) * 1000)
        choice = resp.choices[0].message.content if resp.choices else None
        return {
            "content": choice,
            "latency_ms": latency_ms,
            "tokens_in": getattr(resp.usage, "prompt_tokens", 0) if resp.usage else 0,
            "tokens_out": getattr(resp.usage, "completion_tokens", 0) if resp.usage else 0,
        }

    def _usage(self, res: Dict[str, Any], model: str) -> LLMUsage:
        return LLMUsage(
            model=model,
            tokens_in=res["tokens_in"],
            tokens_out=res["tokens_out"],
            latency_ms=res["latency_ms"],
        )

    async def generate_instant_outfits(
        self, payload: InstantOutfitsInput, *, timeout_ms: int
    ) -> InstantOutfitsOutput:
        messages = build_instant_prompt(payload)
        res = await self._chat(messages, self.model, timeout_ms, temperature=0.8, max_tokens=1500)
        return InstantOutfitsOutput(outfits=parse_instant_outfits(res["content"]), usage=self._usage(res, self.model))

    async def pick_daily_outfits(self, payload: DailyPickInput, *, timeout_ms: int) -> DailyPickOutput:
        messages = build_daily_prompt(payload)
        res = await self._chat(messages, self.model, timeout_ms, temperature=0.7, max_tokens=300)
        picks, summary = parse_daily_picks(res["content"])
        return DailyPickOutput(outfits=picks, summary=summary, usage=self._usage(res, self.model))

    async def chat(self, payload: ChatInput, *, timeout_ms: int) -> ChatOutput:
        messages = build_chat_prompt(payload)
        res = await self._chat(messages, self.model, timeout_ms, temperature=0.7, max_tokens=500, json_mode=False)
        reply = (res["content"] or "").strip() or CHAT_FALLBACK_REPLY
        return ChatOutput(reply=reply, usage=self._usage(res, self.model))

    async def summarize_style(self, payload: StyleSummaryInput, *, timeout_ms: int) -> StyleSummaryOutput:
        messages = build_style_summary_prompt(payload)
        res = await self._chat(messages, self.model, timeout_ms, temperature=0.8, max_tokens=300)
        return StyleSummaryOutput(summary=parse_summary(res["content"]), usage=self._usage(res, self.model))

    async def discover_trends(self, payload: TrendDiscoveryInput, *, timeout_ms: int) -> TrendDiscoveryOutput:
        messages = build_trends_prompt(payload)
        res = await self._chat(messages, self.model_trends, timeout_ms, temperature=0.8, max_tokens=2000)
        return TrendDiscoveryOutput(trends=parse_trends(res["content"]), usage=self._usage(res, self.model_trends))


def _load(raw: str | None) -> Dict[str, Any]:
    if not raw:
        raise LLMError("empty response")
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise LLMError("invalid json") from exc
    if not isinstance(data, dict):
        raise LLMError("expected a json object")
    return data


def parse_instant_outfits(raw: str | None) -> List[InstantOutfit]:
    data = _load(raw)
    outfits = data.get("outfits")
    if not isinstance(outfits, list):
        raise LLMError("missing outfits array")
    out: List[InstantOutfit] = []
    for o in outfits[:3]:
        if not isinstance(o, dict):
            continue
        try:
            out.append(InstantOutfit.model_validate(o))
        except ValueError:
            continue
    if not out:
        raise LLMError("no usable outfits")
    return out


def parse_daily_picks(raw: str | None) -> tuple[List[DailyPick], str]:
    data = _load(raw)
    outfits = data.get("outfits")
    if not isinstance(outfits, list):
        raise LLMError("missing outfits array")
    picks: List[DailyPick] = []
    for o in outfits:
        if isinstance(o, dict) and o.get("outfit_id"):
            picks.append(DailyPick(outfit_id=str(o["outfit_id"]), reasoning=str(o.get("reasoning") or "")))
    return picks, str(data.get("summary") or "")


def parse_summary(raw: str | None) -> str:
    data = _load(raw)
    summary = str(data.get("summary") or "").strip()
    if not summary:
        raise LLMError("empty summary")
    return summary


def parse_trends(raw: str | None) -> List[TrendOut]:
    data = _load(raw)
    trends = data.get("trends")
    if not isinstance(trends, list):
        raise LLMError("missing trends array")
    out: List[TrendOut] = []
    for t in trends:
        if not isinstance(t, dict):
            continue
        try:
            out.append(TrendOut.model_validate(t))
        except ValueError:
            continue
    return out
