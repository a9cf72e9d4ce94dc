import re
from typing import Protocol

import structlog
from anthropic import APIError, AsyncAnthropic

from checkin.ai.prompts import ENTRY_REFINEMENT_SYSTEM_PROMPT
from checkin.config import settings

log = structlog.get_logger()

_BULLET_RE = re.compile(r"^\s*[-•*]\s*")
# Commas and semicolons separate items unless a number follows ("1,000", "v2, 3").
_SPLIT_RE = re.compile(r"[,;](?!\s*\d)")


class Refiner(Protocol):
    async def refine(self, text: str) -> str: ...


def cleanup_entry(text: str) -> str:
    items = []
    for line in text.splitlines():
        line = " ".join(_BULLET_RE.sub("", line).split())
        items.extend(part.strip() for part in _SPLIT_RE.split(line))
    return "\n".join(item for item in items if item)


class LocalCleanupRefiner:
    async def refine(self, text: str) -> str:
        return cleanup_entry(text)


class LLMRefiner:
    def __init__(
        self,
        client: AsyncAnthropic | None = None,
        model: str | None = None,
        fallback: Refiner | None = None,
    ) -> None:
        self.client = client or AsyncAnthropic(api_key=settings.anthropic_api_key)
        self.model = model or settings.anthropic_model
        self.fallback = fallback or LocalCleanupRefiner()

    async def refine(self, text: str) -> str:
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=512,
                system=ENTRY_REFINEMENT_SYSTEM_PROMPT,
                messages=[{"role": "user", "content": text}],
            )
            raw = response.content[0].text.strip()
        except APIError as exc:
            log.warning("refiner_fallback", error=str(exc))
            return await self.fallback.refine(text)

        lines = [_BULLET_RE.sub("", line).strip() for line in raw.splitlines()]
        refined = "\n".join(line for line in lines if line)
        if not refined:
            log.warning("refiner_empty_output")
            return await self.fallback.refine(text)
        return refined


def get_refiner() -> Refiner:
    if settings.anthropic_api_key:
        return LLMRefiner()
    return LocalCleanupRefiner()
