# src/gemini_kit/gemini/__init__.py

"""Gemini request glue.

Plain-dict helpers that place compatible function declarations into Gemini
request payloads. No transport: nothing here talks to the API.

Example:
    >>> from gemini_kit.gemini import tools_to_gemini_schema
    >>> from gemini_kit.tools import ToolDescriptor, TransformCache
    >>>
    >>> cache = TransformCache()
    >>> tools = [ToolDescriptor(name="ping", inputSchema={"type": "object"})]
    >>> block = tools_to_gemini_schema(tools, cache)[0]
    >>> block["functionDeclarations"][0]["parameters"]
    {'type': 'object'}
"""

from ._tool_schema import tools_to_gemini_schema, transform_mcp_tools
from .payload import normalize_tools_payload, remap_model_name

__all__ = [
    "normalize_tools_payload",
    "remap_model_name",
    "tools_to_gemini_schema",
    "transform_mcp_tools",
]
