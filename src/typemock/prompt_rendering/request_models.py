"""Prompt rendering entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_BATCH_TEMPERATURE = 0.8


@dataclass(frozen=True)
class GenerationSettings:
    """Explicit settings for sample-data generation requests."""

    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    batch_temperature: float = DEFAULT_BATCH_TEMPERATURE


@dataclass(frozen=True)
class GenerationRequest:
    """One fully rendered sample-data request."""

    model: str
    system_prompt: str
    user_prompt: str
    temperature: float
    sample_count: int

    def to_chat_payload(self) -> dict[str, Any]:
        """Return a chat-completions style request body."""
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": self.user_prompt},
            ],
            "temperature": self.temperature,
        }
