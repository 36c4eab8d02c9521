# src/gemini_kit/schemas/codes.py

"""Warning codes emitted by the schema transformation engine.

Every downgrade the engine applies is reported as one of these strings in
``TransformResult.warnings``. Parameterized codes are built with the helper
functions so callers can match on the prefix.
"""

# ============================================================================
# References
# ============================================================================

UNRESOLVED_REF = "unresolved-ref"
CIRCULAR_REF = "circular-ref"
REF_EXPANSION_LIMIT = "ref-expansion-limit"


# ============================================================================
# Types and structure
# ============================================================================

TYPE_INFERRED_ANY = "type-inferred-any"
TYPE_ARRAY_COLLAPSED = "type-array-collapsed"
TUPLE_ITEMS_TRUNCATED = "tuple-items-truncated"
INVALID_NODE = "invalid-node"
MAX_DEPTH_EXCEEDED = "max-depth-exceeded"


# ============================================================================
# Constraints
# ============================================================================

ENUM_NON_STRING_DROPPED = "enum-non-string-dropped"


def type_unsupported(type_name: object) -> str:
    return f"type-unsupported:{type_name}"


def keyword_dropped(keyword: str) -> str:
    return f"keyword-dropped:{keyword}"


def format_dropped(fmt: object) -> str:
    return f"format-dropped:{fmt}"


def exclusive_bound_relaxed(field: str) -> str:
    return f"exclusive-bound-relaxed:{field}"


def all_of_key_conflict(key: str) -> str:
    return f"allOf-key-conflict:{key}"


def composition_simplified(keyword: str) -> str:
    return f"composition-simplified:{keyword}"
