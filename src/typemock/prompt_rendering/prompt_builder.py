"""Sample-data prompt construction service."""

from __future__ import annotations

import json

from typemock.schema_extraction import InterfaceSchema

from .request_models import GenerationRequest, GenerationSettings

SYSTEM_PROMPT = """You are a professional mock data generator. Produce highly realistic \
test data from the JSON field schema and documentation the user provides.

Rules:
1. Follow the declared type of every field exactly.
2. Use each field's docs to understand its business meaning and produce matching values.
3. Fields with a format (email, UUID, date) must hold values in that format.
4. Fields with a documented range must hold values inside that range.
5. For literal unions, pick one of the allowed values.
6. Arrays hold 2 to 4 elements.
7. Reply with plain JSON only: no Markdown, no code fences, no explanations."""

_FENCE = "```"


def build_generation_request(
    schema: InterfaceSchema, settings: GenerationSettings, *, count: int = 1
) -> GenerationRequest:
    """Render the request asking for `count` sample objects of `schema`.

    Raises:
      ValueError: If `count` is smaller than one.
    """
    if count < 1:
        raise ValueError("count must be at least 1.")

    fields_json = json.dumps(
        [field.to_payload() for field in schema.fields], indent=2, ensure_ascii=False
    )
    if count == 1:
        opening = "Generate one mock object for the following declaration schema:"
        closing = "Return the JSON object directly, with nothing else."
        temperature = settings.temperature
    else:
        opening = f"Generate {count} distinct mock objects for the following declaration schema:"
        closing = f"Return a JSON array of {count} objects directly, with nothing else."
        temperature = settings.batch_temperature

    user_prompt = (
        f"{opening}\n\n"
        f"Declaration name: {schema.name}\n"
        f"Declaration docs: {schema.docs or 'none'}\n\n"
        f"Fields:\n{fields_json}\n\n"
        f"{closing}"
    )
    return GenerationRequest(
        model=settings.model,
        system_prompt=SYSTEM_PROMPT,
        user_prompt=user_prompt,
        temperature=temperature,
        sample_count=count,
    )


def extract_json_text(content: str) -> str:
    """Strip a surrounding Markdown code fence from a model reply."""
    cleaned = content.strip()
    if cleaned.startswith(f"{_FENCE}json"):
        cleaned = cleaned[len(_FENCE) + 4 :]
    elif cleaned.startswith(_FENCE):
        cleaned = cleaned[len(_FENCE) :]
    if cleaned.endswith(_FENCE):
        cleaned = cleaned[: -len(_FENCE)]
    return cleaned.strip()
