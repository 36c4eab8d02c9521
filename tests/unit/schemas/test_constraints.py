# tests/unit/schemas/test_constraints.py

import pytest

from gemini_kit.config import TransformConfig
from gemini_kit.schemas import codes
from gemini_kit.schemas.constraints import ConstraintFilter, RequiredFieldFilter
from gemini_kit.schemas.walker import SchemaWalker, make_gemini_compatible


@pytest.fixture
def constraint_filter() -> ConstraintFilter:
    return ConstraintFilter({"date-time"})


class TestExclusiveBounds:
    def test_exclusive_maximum_becomes_inclusive(self) -> None:
        result = make_gemini_compatible({"type": "number", "exclusiveMaximum": 10})

        assert result.schema == {"type": "number", "maximum": 10}
        assert result.warnings == ["exclusive-bound-relaxed:maximum"]

    def test_exclusive_minimum_becomes_inclusive(self) -> None:
        result = make_gemini_compatible({"type": "integer", "exclusiveMinimum": 0})

        assert result.schema == {"type": "integer", "minimum": 0}
        assert result.warnings == ["exclusive-bound-relaxed:minimum"]

    def test_stricter_bound_is_kept(self) -> None:
        result = make_gemini_compatible(
            {
                "type": "number",
                "minimum": 5,
                "exclusiveMinimum": 3,
                "maximum": 5,
                "exclusiveMaximum": 3,
            }
        )

        assert result.schema == {"type": "number", "minimum": 5, "maximum": 3}

    def test_boolean_flag_form(self) -> None:
        result = make_gemini_compatible(
            {"type": "number", "minimum": 0, "exclusiveMinimum": True}
        )

        assert result.schema == {"type": "number", "minimum": 0}
        assert result.warnings == ["exclusive-bound-relaxed:minimum"]

    def test_false_flag_is_removed_silently(self) -> None:
        result = make_gemini_compatible(
            {"type": "number", "maximum": 9, "exclusiveMaximum": False}
        )

        assert result.schema == {"type": "number", "maximum": 9}
        assert result.warnings == []

    def test_orphan_flag_is_removed_silently(self) -> None:
        result = make_gemini_compatible({"type": "number", "exclusiveMaximum": True})

        assert result.schema == {"type": "number"}
        assert result.warnings == []


class TestFormat:
    def test_unsupported_format_is_dropped(self) -> None:
        result = make_gemini_compatible({"type": "string", "format": "email"})

        assert result.schema == {"type": "string"}
        assert result.warnings == ["format-dropped:email"]

    def test_supported_format_is_kept(self) -> None:
        schema = {"type": "string", "format": "date-time"}

        assert make_gemini_compatible(schema).schema == schema

    def test_allowed_formats_are_configurable(self) -> None:
        walker = SchemaWalker(TransformConfig(allowed_formats=frozenset({"email"})))

        kept = walker.transform({"type": "string", "format": "email"})
        dropped = walker.transform({"type": "string", "format": "date-time"})

        assert kept.schema == {"type": "string", "format": "email"}
        assert dropped.schema == {"type": "string"}


class TestEnum:
    def test_non_string_entries_are_dropped(self) -> None:
        result = make_gemini_compatible(
            {"type": "string", "enum": ["a", 1, None, "b", True]}
        )

        assert result.schema == {"type": "string", "enum": ["a", "b"]}
        assert result.warnings == [codes.ENUM_NON_STRING_DROPPED]

    def test_enum_without_strings_is_removed(self) -> None:
        result = make_gemini_compatible({"type": "integer", "enum": [1, 2, 3]})

        assert result.schema == {"type": "integer"}
        assert result.warnings == [codes.ENUM_NON_STRING_DROPPED]

    def test_malformed_enum_is_removed(
        self, constraint_filter: ConstraintFilter
    ) -> None:
        warnings: list[str] = []
        node = constraint_filter.apply(
            {"type": "string", "enum": "a"}, warnings, lambda child: child
        )

        assert node == {"type": "string"}
        assert warnings == [codes.ENUM_NON_STRING_DROPPED]


class TestAdditionalProperties:
    def test_boolean_passes_through(self) -> None:
        schema = {"type": "object", "additionalProperties": False}

        assert make_gemini_compatible(schema).schema == schema

    def test_schema_is_transformed(self) -> None:
        result = make_gemini_compatible(
            {
                "type": "object",
                "additionalProperties": {"type": ["integer", "null"]},
            }
        )

        assert result.schema == {
            "type": "object",
            "additionalProperties": {"type": "integer", "nullable": True},
        }

    def test_malformed_value_is_dropped(
        self, constraint_filter: ConstraintFilter
    ) -> None:
        node = constraint_filter.apply(
            {"type": "object", "additionalProperties": "yes"}, [], lambda child: child
        )

        assert node == {"type": "object"}


class TestRequiredFieldFilter:
    def test_dangling_required_is_pruned(self) -> None:
        result = make_gemini_compatible(
            {
                "type": "object",
                "properties": {"a": {"type": "string"}},
                "required": ["a", "ghost"],
            }
        )

        assert result.schema == {
            "type": "object",
            "properties": {"a": {"type": "string"}},
            "required": ["a"],
        }
        assert result.warnings == []

    def test_duplicates_and_non_strings_are_removed(self) -> None:
        node = RequiredFieldFilter().filter(
            {"properties": {"a": {}}, "required": ["a", "a", 3]}
        )

        assert node == {"properties": {"a": {}}, "required": ["a"]}

    def test_empty_result_removes_key(self) -> None:
        node = RequiredFieldFilter().filter(
            {"properties": {"a": {}}, "required": ["ghost"]}
        )

        assert node == {"properties": {"a": {}}}

    def test_required_without_properties_is_removed(self) -> None:
        node = RequiredFieldFilter().filter({"type": "object", "required": ["a"]})

        assert node == {"type": "object"}
