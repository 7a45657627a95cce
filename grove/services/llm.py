"""Completion client: system prompt + history + user message in, text out."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Protocol

from groq import AsyncGroq

from grove.core.config import get_settings


@dataclass
class Completion:
    text: str
    usage: dict[str, Any] = field(default_factory=dict)


class CompletionClient(Protocol):
    async def complete(
        self,
        system_prompt: str,
        history: list[dict[str, str]],
        user_message: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> Completion: ...


class GroqCompletionClient:
    """Groq chat completions. The SDK client is created on first use."""

    def __init__(self, api_key: str, model: str):
        self.api_key = api_key
        self.model = model
        self._client: AsyncGroq | None = None

    async def complete(
        self,
        system_prompt: str,
        history: list[dict[str, str]],
        user_message: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ) -> Completion:
        if self._client is None:
            self._client = AsyncGroq(api_key=self.api_key)
        messages = [
            {"role": "system", "content": system_prompt},
            *({"role": m["role"], "content": m["content"]} for m in history),
            {"role": "user", "content": user_message},
        ]
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        text = response.choices[0].message.content if response.choices else None
        usage = response.usage.model_dump() if response.usage else {}
        return Completion(text=text or "", usage=usage)


@lru_cache
def get_completion_client() -> CompletionClient:
    settings = get_settings()
    return GroqCompletionClient(api_key=settings.groq_api_key, model=settings.groq_model)
