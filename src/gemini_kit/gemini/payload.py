# src/gemini_kit/gemini/payload.py

import logging
import re
from typing import Any

from gemini_kit.tools.tool import ToolDescriptor
from gemini_kit.tools.transform_cache import TransformCache

logger = logging.getLogger(__name__)

_MODEL_NAME = re.compile(r"^(?:(models|tunedModels)/)?(.+)$")


def remap_model_name(name: str | None) -> str | None:
    """Map ``google-*`` model names to the ``gemini-*`` names the API knows.

    A ``models/`` or ``tunedModels/`` prefix is kept.

    Example:
        >>> remap_model_name("models/google-2.5-flash")
        'models/gemini-2.5-flash'
    """
    if not name:
        return name

    match = _MODEL_NAME.match(name)
    if match is None:
        return name

    prefix = f"{match.group(1)}/" if match.group(1) else ""
    base = match.group(2)
    if base.startswith("google-"):
        base = "gemini-" + base[len("google-") :]
    return prefix + base


def _is_declaration(value: Any) -> bool:
    return (
        isinstance(value, dict)
        and isinstance(value.get("name"), str)
        and isinstance(value.get("description"), (str, type(None)))
    )


def normalize_tools_payload(
    request: dict[str, Any],
    cache: TransformCache,
) -> dict[str, Any]:
    """Rewrite the function declarations of a built request payload.

    Accepts both ``function_declarations`` and ``functionDeclarations``
    entries; other tool entries (e.g. built-in search) pass through, and so
    do declarations without a string ``name``.

    Returns:
        A new request dict. The input request is never mutated.
    """
    tools = request.get("tools")
    if not tools:
        return request

    normalized: list[Any] = []
    for tool in tools:
        declarations = None
        if isinstance(tool, dict):
            declarations = tool.get(
                "function_declarations", tool.get("functionDeclarations")
            )
        if not isinstance(declarations, list):
            normalized.append(tool)
            continue

        valid = [fd for fd in declarations if _is_declaration(fd)]
        if len(valid) != len(declarations):
            logger.debug(
                "Passing %d malformed function declarations through unchanged",
                len(declarations) - len(valid),
            )

        descriptors = [
            ToolDescriptor(
                name=fd["name"],
                description=fd.get("description"),
                input_schema=fd.get("parameters") or {},
            )
            for fd in valid
        ]
        logger.debug("Normalizing %d function declarations", len(descriptors))
        compatible = iter(cache.get_or_compute(descriptors))
        normalized.append(
            {
                "functionDeclarations": [
                    next(compatible).to_dict() if _is_declaration(fd) else fd
                    for fd in declarations
                ]
            }
        )

    return {**request, "tools": normalized}
