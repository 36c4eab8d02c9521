# src/gemini_kit/config.py

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Literal

import yaml

logger = logging.getLogger(__name__)

RequiredPolicy = Literal["intersection", "union", "first"]

DEFAULT_ALLOWED_FORMATS: frozenset[str] = frozenset(
    {"enum", "date-time", "float", "double", "int32", "int64"}
)


@dataclass(frozen=True)
class TransformConfig:
    """Configuration for the schema transformation engine.

    Immutable. Explicit. No magic defaults from environment.
    """

    verbose: bool = False
    # How anyOf/oneOf branches combine their required lists
    required_policy: RequiredPolicy = "intersection"
    allowed_formats: frozenset[str] = DEFAULT_ALLOWED_FORMATS
    max_depth: int = 64
    # References followed per document before falling back to an object
    max_ref_expansions: int = 1000

    def __post_init__(self) -> None:
        if self.required_policy not in ("intersection", "union", "first"):
            raise ValueError(f"Unknown required policy: {self.required_policy}")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        if self.max_ref_expansions < 0:
            raise ValueError("max_ref_expansions must not be negative")
        # Accept any iterable of strings from callers and YAML
        object.__setattr__(self, "allowed_formats", frozenset(self.allowed_formats))


def load_transform_config(path: str | Path) -> TransformConfig:
    """Load a TransformConfig from a YAML file.

    Args:
        path: YAML file with any of the TransformConfig fields at top level.

    Returns:
        The parsed, validated config. An empty file yields the defaults.

    Raises:
        ValueError: If the file holds unknown keys or is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    known = {f.name for f in fields(TransformConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    logger.debug("Loaded transform config from %s: %s", path, data)
    return TransformConfig(**data)
