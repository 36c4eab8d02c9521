from .tool import FunctionDeclaration, ToolDescriptor
from .tool_adapter import ToolAdapter
from .transform_cache import TransformCache, content_hash

__all__ = [
    "FunctionDeclaration",
    "ToolAdapter",
    "ToolDescriptor",
    "TransformCache",
    "content_hash",
]
