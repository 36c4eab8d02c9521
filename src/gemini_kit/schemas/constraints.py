# src/gemini_kit/schemas/constraints.py

"""Keyword-level rewrites for the Gemini schema dialect.

These operate on a node whose children have already been walked. They edit
the node in place and return it; the walker only hands them nodes it built
itself, never caller-owned input.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Any

from . import codes
from .types import JsonSchema

logger = logging.getLogger(__name__)

_BOUNDS = (
    ("exclusiveMinimum", "minimum", max),
    ("exclusiveMaximum", "maximum", min),
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConstraintFilter:
    """Drops or relaxes constraints the target dialect rejects."""

    def __init__(self, allowed_formats: Iterable[str]) -> None:
        self.allowed_formats = frozenset(allowed_formats)

    def apply(
        self,
        node: JsonSchema,
        warnings: list[str],
        walk_child: Callable[[Any], JsonSchema],
    ) -> JsonSchema:
        self._relax_exclusive_bounds(node, warnings)
        self._filter_format(node, warnings)
        self._filter_enum(node, warnings)
        self._filter_additional_properties(node, walk_child)
        return node

    def _relax_exclusive_bounds(self, node: JsonSchema, warnings: list[str]) -> None:
        for exclusive, inclusive, stricter in _BOUNDS:
            if exclusive not in node:
                continue
            value = node.pop(exclusive)

            # Draft-4 form: a boolean flag qualifying the sibling bound
            if isinstance(value, bool):
                if value and _is_number(node.get(inclusive)):
                    warnings.append(codes.exclusive_bound_relaxed(inclusive))
                continue

            if not _is_number(value):
                logger.debug("Dropped non-numeric %s: %r", exclusive, value)
                continue

            current = node.get(inclusive)
            node[inclusive] = stricter(current, value) if _is_number(current) else value
            warnings.append(codes.exclusive_bound_relaxed(inclusive))

    def _filter_format(self, node: JsonSchema, warnings: list[str]) -> None:
        if "format" not in node:
            return
        fmt = node["format"]
        if isinstance(fmt, str) and fmt in self.allowed_formats:
            return
        del node["format"]
        warnings.append(codes.format_dropped(fmt))

    def _filter_enum(self, node: JsonSchema, warnings: list[str]) -> None:
        if "enum" not in node:
            return
        values = node["enum"]
        if not isinstance(values, list):
            del node["enum"]
            warnings.append(codes.ENUM_NON_STRING_DROPPED)
            return

        strings = [v for v in values if isinstance(v, str)]
        if len(strings) != len(values):
            warnings.append(codes.ENUM_NON_STRING_DROPPED)
        if strings:
            node["enum"] = strings
        else:
            del node["enum"]

    def _filter_additional_properties(
        self,
        node: JsonSchema,
        walk_child: Callable[[Any], JsonSchema],
    ) -> None:
        if "additionalProperties" not in node:
            return
        value = node["additionalProperties"]
        if isinstance(value, bool):
            return
        if isinstance(value, dict):
            node["additionalProperties"] = walk_child(value)
            return
        logger.debug("Dropped malformed additionalProperties: %r", value)
        del node["additionalProperties"]


class RequiredFieldFilter:
    """Keeps ``required`` consistent with the final ``properties``."""

    def filter(self, node: JsonSchema) -> JsonSchema:
        if "required" not in node:
            return node

        required = node["required"]
        properties = node.get("properties")
        if not isinstance(required, list) or not isinstance(properties, dict):
            del node["required"]
            return node

        kept: list[str] = []
        for name in required:
            if isinstance(name, str) and name in properties and name not in kept:
                kept.append(name)

        if len(kept) != len(required):
            logger.debug(
                "Pruned required entries: %s",
                [name for name in required if name not in kept],
            )

        if kept:
            node["required"] = kept
        else:
            del node["required"]
        return node
