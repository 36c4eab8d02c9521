# src/gemini_kit/schemas/validator.py

"""Auditor for transformed schemas.

Checks a schema against the constraints of the Gemini dialect and reports
every violation with its location. Used by tests and by callers that want
to double-check a batch; it is not part of the transformation path.
"""

from collections.abc import Iterable
from typing import Any

from .types import ALLOWED_TYPES, FORBIDDEN_KEYS


class Validator:
    def validate(self, node: Any) -> list[str]:
        """Return all violations found in ``node``; empty when compliant."""
        violations: list[str] = []
        self._check(node, "#", violations)
        return violations

    def _check(self, node: Any, path: str, violations: list[str]) -> None:
        if not isinstance(node, dict):
            kind = type(node).__name__
            violations.append(f"{path}: schema must be an object, got {kind}")
            return

        for key in node:
            if key in FORBIDDEN_KEYS:
                violations.append(f"{path}: forbidden key '{key}'")

        if "type" in node:
            type_ = node["type"]
            if isinstance(type_, list):
                violations.append(f"{path}: type must be a single string, got a list")
            elif not isinstance(type_, str) or type_ not in ALLOWED_TYPES:
                violations.append(f"{path}: unsupported type {type_!r}")

        if "enum" in node:
            enum = node["enum"]
            if not isinstance(enum, list):
                violations.append(f"{path}: enum must be a list")
            else:
                for value in enum:
                    if not isinstance(value, str):
                        violations.append(
                            f"{path}: non-string enum value {value!r}"
                        )

        properties = node.get("properties")
        if properties is not None and not isinstance(properties, dict):
            violations.append(f"{path}: properties must be an object")
            properties = None

        if "required" in node:
            required = node["required"]
            names = properties or {}
            if not isinstance(required, list):
                violations.append(f"{path}: required must be a list")
            else:
                for name in required:
                    if not isinstance(name, str) or name not in names:
                        violations.append(
                            f"{path}: required entry {name!r} is not a property"
                        )

        for name, child in (properties or {}).items():
            self._check(child, f"{path}/properties/{name}", violations)

        if "items" in node:
            items = node["items"]
            if isinstance(items, list):
                violations.append(f"{path}: items must be a single schema")
            else:
                self._check(items, f"{path}/items", violations)

        additional = node.get("additionalProperties")
        if isinstance(additional, dict):
            self._check(additional, f"{path}/additionalProperties", violations)


def validate_schema(schema: Any) -> list[str]:
    return Validator().validate(schema)


def is_compliant(schema: Any) -> bool:
    return not Validator().validate(schema)


def validate_declarations(declarations: Iterable[Any]) -> dict[str, list[str]]:
    """Audit a batch of function declarations.

    Args:
        declarations: Objects with ``name`` and ``parameters`` attributes
            (FunctionDeclaration) or dicts with the same keys.

    Returns:
        Violations per declaration name, only for non-compliant ones.
    """
    validator = Validator()
    report: dict[str, list[str]] = {}
    for declaration in declarations:
        if isinstance(declaration, dict):
            name, parameters = declaration.get("name"), declaration.get("parameters")
        else:
            name, parameters = declaration.name, declaration.parameters
        violations = validator.validate(parameters)
        if violations:
            report[str(name)] = violations
    return report
