# ai_service.py
from __future__ import annotations

import logging
import os
import random
from typing import List, Optional

from openai import OpenAI

from constants import GENERIC_AI_RESPONSES, SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class SimulatedAiService:
    """Respostas genéricas pré-definidas, sem chamada externa."""

    def __init__(self, responses: Optional[List[str]] = None, rng: Optional[random.Random] = None):
        self.responses = list(responses or GENERIC_AI_RESPONSES)
        self._rng = rng or random.Random()

    def generate_response(self, message: str) -> str:
        reply = self._rng.choice(self.responses)
        logger.info("Simulated AI response for %r: %r", message, reply)
        return reply


class OpenAIService:
    def __init__(self, model: str = "gpt-4.1-mini", client: Optional[OpenAI] = None):
        self.model = model
        self.client = client or OpenAI()

    def generate_response(self, message: str) -> str:
        resp = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": message},
            ],
            temperature=0.7,
            presence_penalty=0.6,
            frequency_penalty=0.2,
        )
        return (resp.choices[0].message.content or "").strip()


def make_ai_service(settings):
    backend = (getattr(settings, "AI_BACKEND", "simulated") or "simulated").lower()
    if backend == "openai":
        if not os.getenv("OPENAI_API_KEY"):
            logger.warning("AI_BACKEND=openai mas OPENAI_API_KEY não definido – usando SimulatedAiService")
            return SimulatedAiService()
        return OpenAIService(model=getattr(settings, "OPENAI_MODEL", "gpt-4.1-mini"))
    return SimulatedAiService()
