# src/gemini_kit/schemas/types.py

from dataclasses import dataclass, field
from typing import Any

JsonSchema = dict[str, Any]

ALLOWED_TYPES = frozenset(
    {"string", "number", "integer", "boolean", "array", "object"}
)

# Applied in this order when a node carries more than one
COMPOSITION_KEYWORDS = ("allOf", "anyOf", "oneOf")

DEFS_KEYWORDS = ("$defs", "definitions")

FORBIDDEN_KEYS = frozenset(
    {
        "allOf",
        "anyOf",
        "oneOf",
        "$ref",
        "$defs",
        "definitions",
        "$schema",
        "exclusiveMinimum",
        "exclusiveMaximum",
    }
)


@dataclass(frozen=True)
class RefNode:
    """A node whose meaning lives behind a ``$ref`` pointer."""

    ref: Any
    siblings: JsonSchema


@dataclass(frozen=True)
class CompositionNode:
    """A node combining branches with allOf/anyOf/oneOf.

    ``base`` holds the node's own keys with the composition keywords removed.
    """

    compositions: tuple[tuple[str, tuple[Any, ...]], ...]
    base: JsonSchema


@dataclass(frozen=True)
class LeafNode:
    schema: JsonSchema


@dataclass(frozen=True)
class InvalidNode:
    """Anything that is not a schema object."""

    value: Any


SchemaNode = RefNode | CompositionNode | LeafNode | InvalidNode


def classify(node: Any) -> SchemaNode:
    """Sort a raw schema value into exactly one node kind."""
    if node is True:
        return LeafNode({})
    if not isinstance(node, dict):
        return InvalidNode(node)

    if "$ref" in node:
        siblings = {k: v for k, v in node.items() if k != "$ref"}
        return RefNode(ref=node["$ref"], siblings=siblings)

    compositions = []
    for keyword in COMPOSITION_KEYWORDS:
        if keyword not in node:
            continue
        branches = node[keyword]
        if isinstance(branches, dict):
            branches = [branches]
        elif not isinstance(branches, list):
            branches = []
        compositions.append((keyword, tuple(branches)))

    if compositions:
        base = {k: v for k, v in node.items() if k not in COMPOSITION_KEYWORDS}
        return CompositionNode(compositions=tuple(compositions), base=base)

    return LeafNode(node)


@dataclass(frozen=True)
class TransformResult:
    """Outcome of transforming one schema.

    Attributes:
        schema: The compatible schema. Never shares objects with the input.
        warnings: Every downgrade applied, in the order it happened.
        was_modified: False only when the output equals the input.
    """

    schema: JsonSchema
    warnings: list[str] = field(default_factory=list)
    was_modified: bool = False
