# src/gemini_kit/schemas/walker.py

"""Recursive conversion of JSON Schema (Draft 7) into the Gemini dialect.

The walker never raises on schema content. Anything the target dialect
cannot express is downgraded and reported in ``TransformResult.warnings``.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, assert_never

from gemini_kit.config import TransformConfig

from . import codes
from .composition import CompositionResolver
from .constraints import ConstraintFilter, RequiredFieldFilter
from .refs import ReferenceResolver
from .types import (
    ALLOWED_TYPES,
    DEFS_KEYWORDS,
    CompositionNode,
    InvalidNode,
    JsonSchema,
    LeafNode,
    RefNode,
    SchemaNode,
    TransformResult,
    classify,
)

logger = logging.getLogger(__name__)

# Metadata the target ignores; dropping it loses nothing
_SILENT_KEYWORDS = frozenset({"$schema", "$id", "$comment", *DEFS_KEYWORDS})

# Draft-7 keywords with no OpenAPI 3.0 counterpart
UNSUPPORTED_KEYWORDS = frozenset(
    {
        "not",
        "if",
        "then",
        "else",
        "patternProperties",
        "dependencies",
        "dependentRequired",
        "dependentSchemas",
        "propertyNames",
        "contains",
        "additionalItems",
        "unevaluatedProperties",
        "unevaluatedItems",
    }
)


@dataclass
class _WalkContext:
    resolver: ReferenceResolver
    warnings: list[str] = field(default_factory=list)
    # Nodes declaring $defs/definitions on the current path, outermost first
    scopes: list[JsonSchema] = field(default_factory=list)


class SchemaWalker:
    """Converts one schema document to the Gemini-compatible dialect."""

    def __init__(self, config: TransformConfig | None = None) -> None:
        self.config = config or TransformConfig()
        self.constraints = ConstraintFilter(self.config.allowed_formats)
        self.required = RequiredFieldFilter()
        self.composition = CompositionResolver(self.config.required_policy)

    def transform(self, schema: Any) -> TransformResult:
        """Transform a whole schema document.

        Args:
            schema: A JSON-Schema-shaped value. Not mutated.

        Returns:
            TransformResult with the compatible schema and every downgrade
            applied along the way.
        """
        resolver = ReferenceResolver(schema, self.config.max_ref_expansions)
        context = _WalkContext(resolver=resolver)
        output = self._walk(schema, context, depth=0)

        if context.warnings:
            logger.debug("Schema transformed with warnings: %s", context.warnings)

        return TransformResult(
            schema=output,
            warnings=context.warnings,
            was_modified=output != schema,
        )

    def _walk(
        self,
        node: Any,
        ctx: _WalkContext,
        depth: int,
        finalize: bool = True,
    ) -> JsonSchema:
        if depth > self.config.max_depth:
            logger.debug("Schema nesting exceeds max_depth=%d", self.config.max_depth)
            ctx.warnings.append(codes.MAX_DEPTH_EXCEEDED)
            return {}

        declares_defs = isinstance(node, dict) and any(k in node for k in DEFS_KEYWORDS)
        if declares_defs:
            ctx.scopes.append(node)
        try:
            return self._dispatch(classify(node), ctx, depth, finalize)
        finally:
            if declares_defs:
                ctx.scopes.pop()

    def _dispatch(
        self,
        kind: SchemaNode,
        ctx: _WalkContext,
        depth: int,
        finalize: bool,
    ) -> JsonSchema:
        if isinstance(kind, RefNode):
            return self._walk_ref(kind, ctx, depth, finalize)
        if isinstance(kind, CompositionNode):
            return self._walk_composition(kind, ctx, depth, finalize)
        if isinstance(kind, LeafNode):
            return self._walk_leaf(kind.schema, ctx, depth, finalize)
        if isinstance(kind, InvalidNode):
            logger.debug("Replaced non-schema value %r with {}", kind.value)
            ctx.warnings.append(codes.INVALID_NODE)
            return {}
        assert_never(kind)

    def _walk_ref(
        self,
        kind: RefNode,
        ctx: _WalkContext,
        depth: int,
        finalize: bool,
    ) -> JsonSchema:
        resolved = ctx.resolver.resolve(kind.ref, ctx.scopes, ctx.warnings)

        # Keys next to $ref (description, default, ...) refine the target
        target = resolved.node
        if isinstance(target, dict):
            merged: Any = {**target, **kind.siblings}
        else:
            merged = kind.siblings or target

        if not resolved.followed:
            return self._walk(merged, ctx, depth + 1, finalize)
        with ctx.resolver.visiting(resolved.node):
            return self._walk(merged, ctx, depth + 1, finalize)

    def _walk_composition(
        self,
        kind: CompositionNode,
        ctx: _WalkContext,
        depth: int,
        finalize: bool,
    ) -> JsonSchema:
        # Branches stay unfinalized so required/properties split across
        # the node and its branches survive the merge
        current = self._walk_leaf(kind.base, ctx, depth, finalize=False)
        for keyword, branches in kind.compositions:
            walked = [self._walk(b, ctx, depth + 1, finalize=False) for b in branches]
            current = self.composition.merge(keyword, current, walked, ctx.warnings)

        return self._finalize(current, ctx) if finalize else current

    def _walk_leaf(
        self,
        schema: JsonSchema,
        ctx: _WalkContext,
        depth: int,
        finalize: bool,
    ) -> JsonSchema:
        out: JsonSchema = {}
        for key, value in schema.items():
            if key in _SILENT_KEYWORDS:
                continue
            if key in UNSUPPORTED_KEYWORDS:
                ctx.warnings.append(codes.keyword_dropped(key))
            elif key == "type":
                self._normalize_type(value, out, ctx)
            elif key == "nullable":
                if isinstance(value, bool):
                    out["nullable"] = out.get("nullable") is True or value
            elif key == "properties":
                out["properties"] = self._walk_properties(value, ctx, depth)
            elif key == "items":
                items = self._walk_items(value, ctx, depth)
                if items is not None:
                    out["items"] = items
            elif key == "required":
                if isinstance(value, list):
                    out["required"] = [n for n in value if isinstance(n, str)]
            elif key == "const":
                if isinstance(value, str):
                    out.setdefault("enum", [value])
                else:
                    ctx.warnings.append(codes.keyword_dropped(key))
            else:
                out[key] = copy.deepcopy(value)

        out = self.constraints.apply(
            out,
            ctx.warnings,
            lambda child: self._walk(child, ctx, depth + 1),
        )
        return self._finalize(out, ctx) if finalize else out

    def _normalize_type(self, value: Any, out: JsonSchema, ctx: _WalkContext) -> None:
        names = value if isinstance(value, list) else [value]

        kept: list[str] = []
        for name in names:
            if name == "null":
                out["nullable"] = True
            elif isinstance(name, str) and name in ALLOWED_TYPES:
                if name not in kept:
                    kept.append(name)
            else:
                ctx.warnings.append(codes.type_unsupported(name))

        if kept:
            out["type"] = kept[0]
        if len(kept) > 1:
            logger.debug("Collapsed type union %s to %s", kept, kept[0])
            ctx.warnings.append(codes.TYPE_ARRAY_COLLAPSED)

    def _walk_properties(
        self, value: Any, ctx: _WalkContext, depth: int
    ) -> JsonSchema:
        if not isinstance(value, dict):
            ctx.warnings.append(codes.INVALID_NODE)
            return {}
        return {name: self._walk(prop, ctx, depth + 1) for name, prop in value.items()}

    def _walk_items(
        self, value: Any, ctx: _WalkContext, depth: int
    ) -> JsonSchema | None:
        if isinstance(value, list):
            ctx.warnings.append(codes.TUPLE_ITEMS_TRUNCATED)
            if not value:
                return None
            value = value[0]
        return self._walk(value, ctx, depth + 1)

    def _finalize(self, node: JsonSchema, ctx: _WalkContext) -> JsonSchema:
        """Infer a missing type and prune required against properties."""
        if "type" not in node:
            if "properties" in node:
                node["type"] = "object"
            elif "items" in node:
                node["type"] = "array"
            elif "enum" in node:
                node["type"] = "string"
            elif node.get("nullable") is not True:
                ctx.warnings.append(codes.TYPE_INFERRED_ANY)
        return self.required.filter(node)


def make_gemini_compatible(
    schema: Any,
    config: TransformConfig | None = None,
) -> TransformResult:
    """Transform one JSON schema into the Gemini-compatible dialect.

    Example:
        >>> result = make_gemini_compatible({"type": ["string", "null"]})
        >>> result.schema
        {'type': 'string', 'nullable': True}
    """
    return SchemaWalker(config).transform(schema)
