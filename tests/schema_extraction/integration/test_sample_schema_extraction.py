"""Schema extraction against the bundled sample declarations."""

from __future__ import annotations

from pathlib import Path

from typemock.schema_extraction import (
    InterfaceSchema,
    extract_all_interface_schemas,
    extract_interface_schema,
    summarize_declarations,
)


def _sample_path() -> Path:
    return Path(__file__).resolve().parents[3] / "samples" / "demo.ts"


def test_user_profile_schema_matches_sample_declaration() -> None:
    schema = extract_interface_schema(_sample_path(), "UserProfile")
    assert isinstance(schema, InterfaceSchema)

    assert schema.docs == "User profile\nBasic information, preferences and related data of a user"
    assert [field.name for field in schema.fields] == [
        "id",
        "username",
        "email",
        "age",
        "balance",
        "isVip",
        "level",
        "hobbies",
        "favoriteArticleIds",
        "address",
        "tags",
        "createdAt",
        "lastLoginAt",
        "settings",
    ]
    fields = {field.name: field for field in schema.fields}
    assert fields["level"].type == '"bronze" | "silver" | "gold" | "platinum"'
    assert fields["hobbies"].type == "string[]"
    assert fields["tags"].type == "UserTag[]"
    assert fields["tags"].children is None
    assert fields["address"].type == "Address"
    assert fields["address"].children is None
    assert fields["lastLoginAt"].is_required is False
    assert fields["id"].docs == "Unique user id in UUID format"
    settings_children = fields["settings"].children
    assert settings_children is not None
    assert [child.name for child in settings_children] == ["theme", "notifications", "language"]


def test_sample_discovery_listing() -> None:
    summaries = summarize_declarations(extract_all_interface_schemas(_sample_path()))

    assert [(s.name, s.field_count) for s in summaries] == [
        ("Address", 4),
        ("UserTag", 3),
        ("UserProfile", 14),
    ]
    assert summaries[0].docs == "Postal address of a user"
