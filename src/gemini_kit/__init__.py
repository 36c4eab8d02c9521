# Config
from .config import TransformConfig, load_transform_config

# Gemini request glue
from .gemini import (
    normalize_tools_payload,
    remap_model_name,
    tools_to_gemini_schema,
    transform_mcp_tools,
)

# Observability
from .observability import MetricsHook, NoOpMetricsHook, RecordingMetricsHook

# Schemas
from .schemas import (
    SchemaWalker,
    TransformResult,
    Validator,
    make_gemini_compatible,
    validate_schema,
)

# Tools
from .tools import FunctionDeclaration, ToolAdapter, ToolDescriptor, TransformCache

__all__ = [
    # Config
    "TransformConfig",
    "load_transform_config",
    # Gemini request glue
    "normalize_tools_payload",
    "remap_model_name",
    "tools_to_gemini_schema",
    "transform_mcp_tools",
    # Observability
    "MetricsHook",
    "NoOpMetricsHook",
    "RecordingMetricsHook",
    # Schemas
    "SchemaWalker",
    "TransformResult",
    "Validator",
    "make_gemini_compatible",
    "validate_schema",
    # Tools
    "FunctionDeclaration",
    "ToolAdapter",
    "ToolDescriptor",
    "TransformCache",
]
