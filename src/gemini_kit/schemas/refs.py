# src/gemini_kit/schemas/refs.py

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from . import codes
from .types import DEFS_KEYWORDS, JsonSchema

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class ResolvedRef:
    """Result of a reference lookup.

    ``followed`` is False when ``node`` is the generic fallback object that
    replaces an unresolvable or circular reference.
    """

    node: Any
    followed: bool


def _fallback() -> JsonSchema:
    return {"type": "object"}


def _unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


class ReferenceResolver:
    """Resolves local ``$ref`` pointers for one schema document.

    Keeps the stack of targets currently being followed so that a target
    reached again from inside itself is reported as a cycle instead of being
    expanded forever. Targets are tracked by identity: the same ref string
    may name different definitions in different ``$defs`` scopes.

    At most ``max_expansions`` references are followed per document; later
    ones fall back to ``{"type": "object"}``. Shared definitions referenced
    from many places would otherwise inline into an exponentially large tree.
    """

    def __init__(self, root: Any, max_expansions: int = 1000) -> None:
        self._root = root
        self._visited: list[int] = []
        self.max_expansions = max_expansions
        self.expansions = 0

    def resolve(
        self,
        ref: Any,
        scopes: Sequence[JsonSchema],
        warnings: list[str],
    ) -> ResolvedRef:
        """Look up ``ref`` against the nearest enclosing definitions.

        Args:
            ref: The raw ``$ref`` value.
            scopes: Enclosing nodes that declare ``$defs``/``definitions``,
                outermost first.
            warnings: Receives ``unresolved-ref``, ``circular-ref`` or
                ``ref-expansion-limit``.

        Returns:
            The target node to walk, or a ``{"type": "object"}`` fallback.
        """
        target = self._lookup(ref, scopes) if isinstance(ref, str) else _MISSING
        if target is _MISSING:
            logger.debug("Unresolved reference: %r", ref)
            warnings.append(codes.UNRESOLVED_REF)
            return ResolvedRef(_fallback(), followed=False)

        if id(target) in self._visited:
            logger.debug("Circular reference: %s", ref)
            warnings.append(codes.CIRCULAR_REF)
            return ResolvedRef(_fallback(), followed=False)

        if self.expansions >= self.max_expansions:
            logger.debug(
                "Reference %s not expanded, limit of %d reached",
                ref,
                self.max_expansions,
            )
            warnings.append(codes.REF_EXPANSION_LIMIT)
            return ResolvedRef(_fallback(), followed=False)

        self.expansions += 1
        return ResolvedRef(target, followed=True)

    @contextmanager
    def visiting(self, target: Any) -> Iterator[None]:
        """Mark a resolved target as being walked."""
        self._visited.append(id(target))
        try:
            yield
        finally:
            self._visited.pop()

    def _lookup(self, ref: str, scopes: Sequence[JsonSchema]) -> Any:
        # Only document-local pointers are supported, no remote fetching
        if not ref.startswith("#"):
            return _MISSING

        pointer = ref[1:]
        if pointer == "":
            return self._root
        if not pointer.startswith("/"):
            return _MISSING

        tokens = [_unescape(t) for t in pointer[1:].split("/")]

        if len(tokens) == 2 and tokens[0] in DEFS_KEYWORDS:
            for scope in reversed(scopes):
                defs = scope.get(tokens[0])
                if isinstance(defs, dict) and tokens[1] in defs:
                    return defs[tokens[1]]

        return self._follow_pointer(tokens)

    def _follow_pointer(self, tokens: list[str]) -> Any:
        current = self._root
        for token in tokens:
            if isinstance(current, dict) and token in current:
                current = current[token]
            elif isinstance(current, list) and token.isdigit():
                index = int(token)
                if index >= len(current):
                    return _MISSING
                current = current[index]
            else:
                return _MISSING
        return current
