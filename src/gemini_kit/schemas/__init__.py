# src/gemini_kit/schemas/__init__.py

"""Schema compatibility engine for gemini-kit.

Rewrites JSON Schema (Draft 7) tool parameters into the OpenAPI 3.0 subset
accepted by Gemini function calling.

Design principles:
- Pure: No I/O, the input is never mutated
- No-throw: Malformed schema content is downgraded, never raised
- Auditable: Every downgrade is a warning in TransformResult.warnings

Example:
    >>> from gemini_kit.schemas import make_gemini_compatible, validate_schema
    >>>
    >>> result = make_gemini_compatible(
    ...     {"type": "number", "exclusiveMaximum": 10}
    ... )
    >>> result.schema
    {'type': 'number', 'maximum': 10}
    >>> result.warnings
    ['exclusive-bound-relaxed:maximum']
    >>> validate_schema(result.schema)
    []
"""

from . import codes
from .composition import CompositionResolver
from .constraints import ConstraintFilter, RequiredFieldFilter
from .refs import ReferenceResolver
from .types import JsonSchema, TransformResult, classify
from .validator import (
    Validator,
    is_compliant,
    validate_declarations,
    validate_schema,
)
from .walker import SchemaWalker, make_gemini_compatible

__all__ = [
    # Entry points
    "make_gemini_compatible",
    "SchemaWalker",
    # Components
    "CompositionResolver",
    "ConstraintFilter",
    "ReferenceResolver",
    "RequiredFieldFilter",
    # Validation
    "Validator",
    "is_compliant",
    "validate_declarations",
    "validate_schema",
    # Types
    "JsonSchema",
    "TransformResult",
    "classify",
    "codes",
]
