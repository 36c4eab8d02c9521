# tests/unit/schemas/test_composition.py

import pytest

from gemini_kit.config import TransformConfig
from gemini_kit.schemas import codes
from gemini_kit.schemas.composition import CompositionResolver
from gemini_kit.schemas.walker import SchemaWalker, make_gemini_compatible

BRANCH_A = {
    "type": "object",
    "properties": {"a": {"type": "string"}},
    "required": ["a"],
}
BRANCH_AB = {
    "type": "object",
    "properties": {"a": {"type": "string"}, "b": {"type": "number"}},
    "required": ["a", "b"],
}


class TestAnyOf:
    def test_required_is_intersection_of_branches(self) -> None:
        result = make_gemini_compatible({"anyOf": [BRANCH_A, BRANCH_AB]})

        assert result.schema == {
            "type": "object",
            "properties": {"a": {"type": "string"}, "b": {"type": "number"}},
            "required": ["a"],
        }
        assert result.warnings == ["composition-simplified:anyOf"]

    def test_one_of_is_simplified_the_same_way(self) -> None:
        result = make_gemini_compatible({"oneOf": [BRANCH_A, BRANCH_AB]})

        assert result.schema["required"] == ["a"]
        assert result.warnings == ["composition-simplified:oneOf"]

    @pytest.mark.parametrize(
        ("policy", "expected"),
        [("union", ["a", "b"]), ("first", ["a"]), ("intersection", ["a"])],
    )
    def test_required_policy_is_configurable(
        self, policy: str, expected: list[str]
    ) -> None:
        config = TransformConfig(required_policy=policy)  # type: ignore[arg-type]
        walker = SchemaWalker(config)
        result = walker.transform({"anyOf": [BRANCH_A, BRANCH_AB]})

        assert result.schema["required"] == expected

    def test_nullable_alternative_is_lossless(self) -> None:
        schema = {"anyOf": [{"type": "string"}, {"type": "null"}]}
        result = make_gemini_compatible(schema)

        assert result.schema == {"type": "string", "nullable": True}
        assert result.warnings == []

    def test_type_taken_from_first_branch(self) -> None:
        schema = {
            "anyOf": [{"type": "string"}, {"type": "integer"}, {"type": "null"}]
        }
        result = make_gemini_compatible(schema)

        assert result.schema == {"type": "string", "nullable": True}
        assert result.warnings == ["composition-simplified:anyOf"]

    def test_node_keys_overlay_merged_branches(self) -> None:
        schema = {
            "description": "Pick one",
            "anyOf": [{"type": "string"}, {"type": "null"}],
        }
        result = make_gemini_compatible(schema)

        assert result.schema == {
            "type": "string",
            "nullable": True,
            "description": "Pick one",
        }

    def test_optional_model_reference(self) -> None:
        schema = {
            "type": "object",
            "properties": {
                "addr": {
                    "anyOf": [{"$ref": "#/$defs/Address"}, {"type": "null"}],
                    "default": None,
                }
            },
            "$defs": {"Address": BRANCH_A},
        }
        result = make_gemini_compatible(schema)

        assert result.schema["properties"]["addr"] == {
            **BRANCH_A,
            "nullable": True,
            "default": None,
        }

    def test_enum_values_of_all_branches_are_kept(self) -> None:
        schema = {
            "anyOf": [
                {"type": "string", "enum": ["a", "b"]},
                {"type": "string", "enum": ["c", "a"]},
            ]
        }
        result = make_gemini_compatible(schema)

        assert result.schema == {"type": "string", "enum": ["a", "b", "c"]}
        assert result.warnings == ["composition-simplified:anyOf"]

    def test_enum_missing_from_one_branch_is_dropped(self) -> None:
        schema = {"anyOf": [{"type": "string", "enum": ["a"]}, {"type": "string"}]}
        result = make_gemini_compatible(schema)

        assert result.schema == {"type": "string"}

    def test_bounds_of_first_branch_do_not_restrict_others(self) -> None:
        schema = {
            "oneOf": [
                {"type": "integer", "maximum": 5},
                {"type": "integer", "minimum": 100},
            ]
        }
        result = make_gemini_compatible(schema)

        assert result.schema == {"type": "integer"}
        assert result.warnings == ["composition-simplified:oneOf"]

    def test_shared_restrictions_and_first_annotations_are_kept(self) -> None:
        schema = {
            "anyOf": [
                {"type": "string", "maxLength": 10, "description": "Short code"},
                {"type": "string", "maxLength": 10, "pattern": "^[a-z]+$"},
                {"type": "string", "maxLength": 10, "title": "Code"},
            ]
        }
        result = make_gemini_compatible(schema)

        assert result.schema == {
            "type": "string",
            "maxLength": 10,
            "description": "Short code",
        }

    def test_empty_branch_list(self) -> None:
        result = make_gemini_compatible({"anyOf": []})

        assert result.schema == {}
        assert result.warnings == [codes.TYPE_INFERRED_ANY]

    def test_malformed_branch_list_is_ignored(self) -> None:
        result = make_gemini_compatible({"type": "string", "anyOf": "oops"})

        assert result.schema == {"type": "string"}


class TestAllOf:
    def test_properties_and_required_are_merged(self) -> None:
        schema = {
            "allOf": [
                BRANCH_A,
                {"properties": {"b": {"type": "integer"}}, "required": ["b"]},
            ]
        }
        result = make_gemini_compatible(schema)

        assert result.schema == {
            "type": "object",
            "properties": {"a": {"type": "string"}, "b": {"type": "integer"}},
            "required": ["a", "b"],
        }
        assert result.warnings == []

    def test_later_branch_wins_on_conflict(self) -> None:
        schema = {
            "allOf": [
                {"properties": {"a": {"type": "string"}}},
                {"properties": {"a": {"type": "integer"}}},
            ]
        }
        result = make_gemini_compatible(schema)

        assert result.schema["properties"]["a"] == {"type": "integer"}
        assert result.warnings == ["allOf-key-conflict:a"]

    def test_identical_properties_still_report_collision(self) -> None:
        result = make_gemini_compatible({"allOf": [BRANCH_A, BRANCH_A]})

        assert result.schema == BRANCH_A
        assert result.warnings == ["allOf-key-conflict:a"]

    def test_required_on_node_applies_to_branch_properties(self) -> None:
        schema = {
            "type": "object",
            "required": ["a"],
            "allOf": [{"properties": {"a": {"type": "string"}}}],
        }
        result = make_gemini_compatible(schema)

        assert result.schema == BRANCH_A

    def test_single_ref_wrapper_keeps_description(self) -> None:
        schema = {
            "allOf": [{"$ref": "#/$defs/Color"}],
            "description": "Shirt color",
            "$defs": {
                "Color": {"enum": ["red", "green"], "type": "string", "title": "Color"}
            },
        }
        result = make_gemini_compatible(schema)

        assert result.schema == {
            "enum": ["red", "green"],
            "type": "string",
            "title": "Color",
            "description": "Shirt color",
        }
        assert result.warnings == []


class TestCompositionResolver:
    def test_merge_does_not_touch_branches(self) -> None:
        resolver = CompositionResolver()
        branches = [dict(BRANCH_A), dict(BRANCH_AB)]
        warnings: list[str] = []

        merged = resolver.merge("anyOf", {}, branches, warnings)
        merged["properties"]["c"] = {"type": "boolean"}

        assert branches == [BRANCH_A, BRANCH_AB]

    def test_branch_without_required_empties_intersection(self) -> None:
        resolver = CompositionResolver("intersection")
        warnings: list[str] = []

        merged = resolver.merge(
            "anyOf", {}, [BRANCH_A, {"type": "object"}], warnings
        )

        assert "required" not in merged
        assert warnings == ["composition-simplified:anyOf"]
