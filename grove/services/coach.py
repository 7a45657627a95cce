"""Coaching gateway around the completion client.

Every call shape returns a GatewayResult. Completion errors are logged and
contained here; nothing raises past this boundary.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from grove.core.enums import CoachPersonality
from grove.schemas.ai import GeneratedWorkout
from grove.services import prompts
from grove.services.llm import Completion, CompletionClient

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)

PARSE_ERROR = "Could not generate a valid workout: the AI response was not valid JSON"


@dataclass
class GatewayResult:
    success: bool
    text: str = ""
    usage: dict[str, Any] = field(default_factory=dict)
    workout: GeneratedWorkout | None = None
    error: str | None = None
    raw_response: str | None = None


def parse_json_response(text: str) -> Any:
    """Strip markdown code fences and parse. Raises ValueError on bad JSON."""
    cleaned = _FENCE.sub("", text.strip()).strip()
    return json.loads(cleaned)


class CoachGateway:
    def __init__(self, client: CompletionClient):
        self.client = client

    async def _complete(self, label: str, *args, **kwargs) -> Completion | GatewayResult:
        try:
            return await self.client.complete(*args, **kwargs)
        except Exception as e:
            logger.exception("Completion call for %s failed", label)
            return GatewayResult(success=False, error=str(e) or type(e).__name__)

    async def chat(
        self,
        message: str,
        history: list[dict[str, str]],
        personality: CoachPersonality,
        context: dict[str, Any] | None = None,
    ) -> GatewayResult:
        result = await self._complete(
            "chat",
            prompts.system_prompt(personality, context),
            history,
            message,
            temperature=0.7,
            max_tokens=2000,
        )
        if isinstance(result, GatewayResult):
            return result
        return GatewayResult(success=True, text=result.text, usage=result.usage)

    async def generate_workout(self, prompt: str, context: dict[str, Any]) -> GatewayResult:
        """Ask for strict JSON; on a malformed reply keep the raw text for inspection."""
        result = await self._complete(
            "generate_workout",
            prompts.workout_generation_prompt(context),
            [],
            prompt,
            temperature=0.7,
            max_tokens=3000,
        )
        if isinstance(result, GatewayResult):
            return result
        try:
            workout = GeneratedWorkout.model_validate(parse_json_response(result.text))
        except (ValueError, ValidationError) as e:
            logger.warning("Generated workout could not be parsed: %s", e)
            return GatewayResult(
                success=False,
                text=result.text,
                usage=result.usage,
                error=PARSE_ERROR,
                raw_response=result.text,
            )
        return GatewayResult(
            success=True,
            text=result.text,
            usage=result.usage,
            workout=workout,
            raw_response=result.text,
        )

    async def analyze_progress(
        self, stats: dict[str, Any], personality: CoachPersonality
    ) -> GatewayResult:
        result = await self._complete(
            "analyze_progress",
            prompts.system_prompt(personality),
            [],
            prompts.progress_prompt(stats),
            temperature=0.8,
            max_tokens=500,
        )
        if isinstance(result, GatewayResult):
            return result
        return GatewayResult(success=True, text=result.text, usage=result.usage)

    async def answer_question(
        self, question: str, personality: CoachPersonality
    ) -> GatewayResult:
        result = await self._complete(
            "answer_question",
            prompts.question_prompt(personality),
            [],
            question,
            temperature=0.7,
            max_tokens=1000,
        )
        if isinstance(result, GatewayResult):
            return result
        return GatewayResult(success=True, text=result.text, usage=result.usage)
