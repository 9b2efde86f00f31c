from __future__ import annotations

from typing import Protocol

from app.services.llm.types import (
    ChatInput,
    ChatOutput,
    DailyPickInput,
    DailyPickOutput,
    InstantOutfitsInput,
    InstantOutfitsOutput,
    LLMNotConfigured,
    StyleSummaryInput,
    StyleSummaryOutput,
    TrendDiscoveryInput,
    TrendDiscoveryOutput,
)


class LLMProvider(Protocol):
    name: str

    async def generate_instant_outfits(
        self, payload: InstantOutfitsInput, *, timeout_ms: int
    ) -> InstantOutfitsOutput:
        ...

    async def pick_daily_outfits(self, payload: DailyPickInput, *, timeout_ms: int) -> DailyPickOutput:
        ...

    async def chat(self, payload: ChatInput, *, timeout_ms: int) -> ChatOutput:
        ...

    async def summarize_style(self, payload: StyleSummaryInput, *, timeout_ms: int) -> StyleSummaryOutput:
        ...

    async def discover_trends(self, payload: TrendDiscoveryInput, *, timeout_ms: int) -> TrendDiscoveryOutput:
        ...


class NullProvider:
    """Stands in when no LLM is configured; every call reports it."""

    name = "disabled"

    async def generate_instant_outfits(
        self, payload: InstantOutfitsInput, *, timeout_ms: int
    ) -> InstantOutfitsOutput:
        raise LLMNotConfigured(self.name)

    async def pick_daily_outfits(self, payload: DailyPickInput, *, timeout_ms: int) -> DailyPickOutput:
        raise LLMNotConfigured(self.name)

    async def chat(self, payload: ChatInput, *, timeout_ms: int) -> ChatOutput:
        raise LLMNotConfigured(self.name)

    async def summarize_style(self, payload: StyleSummaryInput, *, timeout_ms: int) -> StyleSummaryOutput:
        raise LLMNotConfigured(self.name)

    async def discover_trends(self, payload: TrendDiscoveryInput, *, timeout_ms: int) -> TrendDiscoveryOutput:
        raise LLMNotConfigured(self.name)
