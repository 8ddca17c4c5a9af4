"""Prompt rendering exports."""

from .prompt_builder import SYSTEM_PROMPT, build_generation_request, extract_json_text
from .request_models import (
    DEFAULT_BATCH_TEMPERATURE,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    GenerationRequest,
    GenerationSettings,
)

__all__ = [
    "DEFAULT_BATCH_TEMPERATURE",
    "DEFAULT_MODEL",
    "DEFAULT_TEMPERATURE",
    "GenerationRequest",
    "GenerationSettings",
    "SYSTEM_PROMPT",
    "build_generation_request",
    "extract_json_text",
]
