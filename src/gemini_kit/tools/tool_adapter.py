import logging
from time import monotonic

from gemini_kit.config import TransformConfig
from gemini_kit.observability import names
from gemini_kit.observability.base import MetricsHook, NoOpMetricsHook
from gemini_kit.schemas.types import TransformResult
from gemini_kit.schemas.walker import SchemaWalker

from .tool import FunctionDeclaration, ToolDescriptor

logger = logging.getLogger(__name__)


class ToolAdapter:
    def __init__(
        self,
        config: TransformConfig | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.config = config or TransformConfig()
        self.walker = SchemaWalker(self.config)
        self.metrics_hook = metrics_hook

    def adapt(self, descriptor: ToolDescriptor) -> FunctionDeclaration:
        declaration, _ = self.transform_tool(descriptor)
        return declaration

    def transform_tool(
        self, descriptor: ToolDescriptor
    ) -> tuple[FunctionDeclaration, TransformResult]:
        """Build the function declaration for one tool.

        Returns:
            The declaration and the raw transform result, whose warnings
            describe every downgrade applied to the parameters.
        """
        start = monotonic()
        result = self.walker.transform(descriptor.input_schema)

        parameters = result.schema
        # Gemini rejects parameters without a type; the root is an object
        if "type" not in parameters:
            parameters = {"type": "object", **parameters}

        declaration = FunctionDeclaration(
            name=descriptor.name,
            description=descriptor.description or "",
            parameters=parameters,
        )

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.SCHEMA_TRANSFORM_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            names.SCHEMA_TRANSFORMS_TOTAL, labels={"tool": descriptor.name}
        )
        if result.warnings:
            self.metrics_hook.increment(
                names.SCHEMA_WARNINGS_TOTAL,
                len(result.warnings),
                labels={"tool": descriptor.name},
            )
            self._report(descriptor.name, result.warnings)

        return declaration, result

    def _report(self, tool_name: str, warnings: list[str]) -> None:
        level = logging.INFO if self.config.verbose else logging.DEBUG
        logger.log(
            level,
            "Tool %s: %d schema downgrade(s): %s",
            tool_name,
            len(warnings),
            ", ".join(warnings),
        )
