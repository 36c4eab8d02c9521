# src/gemini_kit/schemas/composition.py

"""Flattening of allOf/anyOf/oneOf.

The Gemini dialect has no union or intersection types, so every composition
is collapsed into a single schema. For anyOf/oneOf this loses precision:
properties of all branches are offered, only the fields the configured
policy keeps stay required, and restrictions not shared by every branch are
dropped.
"""

import logging

from gemini_kit.config import RequiredPolicy

from . import codes
from .types import JsonSchema

logger = logging.getLogger(__name__)

_STRUCTURAL_KEYS = ("type", "properties", "items", "enum")

# Describe the value without restricting it; taken from the first branch
_ANNOTATION_KEYS = frozenset(
    {"description", "title", "default", "example", "examples"}
)

# Combined separately by _union
_MERGED_KEYS = frozenset({"properties", "required", "enum", "nullable"})


def _is_null_only(branch: JsonSchema) -> bool:
    return branch.get("nullable") is True and not any(
        key in branch for key in _STRUCTURAL_KEYS
    )


def _overlay(
    target: JsonSchema,
    source: JsonSchema,
    warnings: list[str] | None = None,
) -> JsonSchema:
    """Merge ``source`` onto ``target``; source wins, required lists union.

    Every property collision is reported as an allOf conflict when
    ``warnings`` is given, even when both sides declare the same schema.
    """
    merged = dict(target)
    for key, value in source.items():
        if key == "properties":
            properties = dict(merged.get("properties", {}))
            for name, prop in value.items():
                if name in properties and warnings is not None:
                    warnings.append(codes.all_of_key_conflict(name))
                properties[name] = prop
            merged["properties"] = properties
        elif key == "required":
            required = list(merged.get("required", []))
            required.extend(name for name in value if name not in required)
            merged["required"] = required
        else:
            merged[key] = value
    return merged


class CompositionResolver:
    """Collapses composition keywords into one flat schema."""

    def __init__(self, required_policy: RequiredPolicy = "intersection") -> None:
        self.required_policy = required_policy

    def merge(
        self,
        keyword: str,
        base: JsonSchema,
        branches: list[JsonSchema],
        warnings: list[str],
    ) -> JsonSchema:
        """Merge already-transformed branches into ``base``.

        Args:
            keyword: ``allOf``, ``anyOf`` or ``oneOf``.
            base: The node's own keys, composition keywords removed.
            branches: Transformed branches, in source order.
            warnings: Receives conflict and simplification warnings.
        """
        if keyword == "allOf":
            return self._merge_all_of(base, branches, warnings)
        return self._merge_alternatives(keyword, base, branches, warnings)

    def _merge_all_of(
        self,
        base: JsonSchema,
        branches: list[JsonSchema],
        warnings: list[str],
    ) -> JsonSchema:
        merged: JsonSchema = {}
        for branch in branches:
            merged = _overlay(merged, branch, warnings)
        return _overlay(merged, base, warnings)

    def _merge_alternatives(
        self,
        keyword: str,
        base: JsonSchema,
        branches: list[JsonSchema],
        warnings: list[str],
    ) -> JsonSchema:
        nullable = any(_is_null_only(b) for b in branches)
        candidates = [b for b in branches if not _is_null_only(b)]

        if len(candidates) <= 1:
            # X-or-null is exactly what nullable expresses, nothing is lost
            merged = dict(candidates[0]) if candidates else {}
        else:
            merged = self._union(candidates)
            logger.debug(
                "Simplified %s with %d branches (required policy: %s)",
                keyword,
                len(candidates),
                self.required_policy,
            )
            warnings.append(codes.composition_simplified(keyword))

        if nullable or any(c.get("nullable") is True for c in candidates):
            merged["nullable"] = True
        return _overlay(merged, base)

    def _union(self, candidates: list[JsonSchema]) -> JsonSchema:
        """Combine alternatives into a schema every branch's values satisfy.

        ``type`` and annotations come from the first branch. A restricting
        keyword survives only when every branch declares it with the same
        value; ``enum`` survives as the union of all branches' values when
        every branch has one.
        """
        first = candidates[0]
        rest = candidates[1:]
        merged: JsonSchema = {}
        for key, value in first.items():
            if key in _MERGED_KEYS:
                continue
            if key == "type" or key in _ANNOTATION_KEYS:
                merged[key] = value
            elif all(key in c and c[key] == value for c in rest):
                merged[key] = value
            else:
                logger.debug("Dropped %s not shared by all alternatives", key)

        enums = [c.get("enum") for c in candidates]
        if all(isinstance(values, list) for values in enums):
            combined: list = []
            for values in enums:
                combined.extend(v for v in values if v not in combined)
            merged["enum"] = combined

        properties: JsonSchema = {}
        for candidate in candidates:
            for name, prop in candidate.get("properties", {}).items():
                properties.setdefault(name, prop)
        if properties:
            merged["properties"] = properties

        required = self._combine_required(
            [candidate.get("required", []) for candidate in candidates]
        )
        if required:
            merged["required"] = required
        return merged

    def _combine_required(self, lists: list[list[str]]) -> list[str]:
        if self.required_policy == "first":
            return list(lists[0])

        if self.required_policy == "union":
            combined: list[str] = []
            for names in lists:
                combined.extend(n for n in names if n not in combined)
            return combined

        # A field stays required only if every branch demands it
        return [name for name in lists[0] if all(name in names for names in lists[1:])]
