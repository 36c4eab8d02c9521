import copy
import hashlib
import json
import logging
import threading
from collections.abc import Sequence

from gemini_kit.observability import names
from gemini_kit.observability.base import MetricsHook, NoOpMetricsHook

from .tool import FunctionDeclaration, ToolDescriptor
from .tool_adapter import ToolAdapter

logger = logging.getLogger(__name__)


def content_hash(tools: Sequence[ToolDescriptor]) -> str:
    """Hash the canonical JSON form of a tool batch.

    Key order inside schemas does not matter; tool order does.
    """
    payload = json.dumps(
        [tool.model_dump(by_alias=True) for tool in tools],
        sort_keys=True,
        separators=(",", ":"),
        default=str,
    )
    return hashlib.blake2b(payload.encode("utf-8"), digest_size=16).hexdigest()


class TransformCache:
    """Memoizes batch transformations by content.

    Owned by the caller; entries live as long as the cache object and are
    never evicted. Safe to share between threads: two threads missing on the
    same batch may both compute it, the results are identical.
    """

    def __init__(
        self,
        adapter: ToolAdapter | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.adapter = adapter or ToolAdapter(metrics_hook=metrics_hook)
        self.metrics_hook = metrics_hook
        self.hits = 0
        self.misses = 0
        self._entries: dict[str, list[FunctionDeclaration]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_or_compute(
        self, tools: Sequence[ToolDescriptor]
    ) -> list[FunctionDeclaration]:
        """Return the declarations for ``tools``, transforming only on a miss.

        The returned declarations are copies; callers may modify them
        without affecting later lookups.
        """
        key = content_hash(tools)

        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self.hits += 1
            else:
                self.misses += 1

        if cached is not None:
            logger.debug("Transform cache hit: %s (%d tools)", key, len(tools))
            self.metrics_hook.increment(names.TRANSFORM_CACHE_HITS)
            return copy.deepcopy(cached)

        logger.debug("Transform cache miss: %s (%d tools)", key, len(tools))
        self.metrics_hook.increment(names.TRANSFORM_CACHE_MISSES)
        declarations = [self.adapter.adapt(tool) for tool in tools]

        with self._lock:
            self._entries.setdefault(key, declarations)
            size = len(self._entries)
        self.metrics_hook.record_gauge(names.TRANSFORM_CACHE_ENTRIES, size)

        return copy.deepcopy(declarations)
