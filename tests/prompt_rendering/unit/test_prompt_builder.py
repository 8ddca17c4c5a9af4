"""Prompt builder tests."""

from __future__ import annotations

import json

import pytest
from typemock.prompt_rendering import (
    SYSTEM_PROMPT,
    GenerationSettings,
    build_generation_request,
    extract_json_text,
)
from typemock.schema_extraction import FieldSchema, InterfaceSchema


def _schema(docs: str = "") -> InterfaceSchema:
    return InterfaceSchema(
        name="Address",
        docs=docs,
        fields=(
            FieldSchema(name="city", type="string", docs="City name", is_required=True),
            FieldSchema(name="zipCode", type="string", docs="", is_required=False),
        ),
    )


def test_single_sample_request_uses_default_temperature() -> None:
    request = build_generation_request(_schema("Postal address"), GenerationSettings())

    assert request.model == "gpt-3.5-turbo"
    assert request.temperature == 0.7
    assert request.sample_count == 1
    assert request.system_prompt == SYSTEM_PROMPT
    assert "Declaration name: Address" in request.user_prompt
    assert "Declaration docs: Postal address" in request.user_prompt
    assert "Return the JSON object directly" in request.user_prompt


def test_user_prompt_embeds_fields_in_declaration_order() -> None:
    request = build_generation_request(_schema(), GenerationSettings())

    fields_json = request.user_prompt.split("Fields:\n", 1)[1].rsplit("\n\n", 1)[0]
    assert json.loads(fields_json) == [
        {"name": "city", "type": "string", "docs": "City name", "isRequired": True},
        {"name": "zipCode", "type": "string", "docs": "", "isRequired": False},
    ]
    assert "Declaration docs: none" in request.user_prompt


def test_batch_request_uses_batch_temperature() -> None:
    settings = GenerationSettings(model="local-model", temperature=0.2, batch_temperature=1.1)

    request = build_generation_request(_schema(), settings, count=3)

    assert request.temperature == 1.1
    assert request.sample_count == 3
    assert "Generate 3 distinct mock objects" in request.user_prompt
    assert "JSON array of 3 objects" in request.user_prompt
    assert request.to_chat_payload() == {
        "model": "local-model",
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": request.user_prompt},
        ],
        "temperature": 1.1,
    }


def test_count_below_one_is_rejected() -> None:
    with pytest.raises(ValueError, match="count"):
        build_generation_request(_schema(), GenerationSettings(), count=0)


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ('{"a": 1}', '{"a": 1}'),
        ('```json\n{"a": 1}\n```', '{"a": 1}'),
        ('```\n[1, 2]\n```  ', "[1, 2]"),
    ],
)
def test_extract_json_text_strips_code_fences(content: str, expected: str) -> None:
    assert extract_json_text(content) == expected
