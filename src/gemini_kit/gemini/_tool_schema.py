# src/gemini_kit/gemini/_tool_schema.py

"""Conversion of tool batches into Gemini request fragments.

Pure data transformation; every schema goes through the caller's cache.
"""

from collections.abc import Sequence
from typing import Any

from gemini_kit.tools.tool import ToolDescriptor
from gemini_kit.tools.transform_cache import TransformCache


def tools_to_gemini_schema(
    tools: Sequence[ToolDescriptor],
    cache: TransformCache,
) -> list[dict]:
    """Convert tool descriptors to Gemini's ``tools`` request field.

    Args:
        tools: Tool descriptors in the order they should be offered.
        cache: Cache used for the schema transformation.

    Returns:
        A single-element list holding the ``functionDeclarations`` block,
        or an empty list when there are no tools.
    """
    if not tools:
        return []
    declarations = cache.get_or_compute(tools)
    return [{"functionDeclarations": [d.to_dict() for d in declarations]}]


def transform_mcp_tools(
    mcp_tools: Sequence[dict[str, Any]],
    cache: TransformCache,
) -> list[dict[str, Any]]:
    """Return MCP tool dicts with Gemini-compatible schemas.

    Every other field of each tool is kept. The schema replaces whichever
    of ``inputSchema``/``schema`` the tool carried (``inputSchema`` if
    neither).
    """
    descriptors = [ToolDescriptor.model_validate(tool) for tool in mcp_tools]
    declarations = cache.get_or_compute(descriptors)

    result = []
    for tool, declaration in zip(mcp_tools, declarations):
        uses_schema_key = "schema" in tool and "inputSchema" not in tool
        key = "schema" if uses_schema_key else "inputSchema"
        result.append({**tool, key: declaration.parameters})
    return result
