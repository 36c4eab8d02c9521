# src/gemini_kit/observability/names.py

"""Standard metric names for gemini-kit observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# Schema Transformation Metrics
# ============================================================================

# Duration
SCHEMA_TRANSFORM_DURATION = "schema_transform_duration"

# Counters (one walk per tool schema actually transformed)
SCHEMA_TRANSFORMS_TOTAL = "schema_transforms_total"
SCHEMA_WARNINGS_TOTAL = "schema_warnings_total"


# ============================================================================
# Transform Cache Metrics
# ============================================================================

# Counters
TRANSFORM_CACHE_HITS = "transform_cache_hits_total"
TRANSFORM_CACHE_MISSES = "transform_cache_misses_total"

# Gauges
TRANSFORM_CACHE_ENTRIES = "transform_cache_entries"
