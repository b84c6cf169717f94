"""Structural type extraction from JSON Schema definitions."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping

from ..models import SourceKind, SourceLocation, StructuralType
from .prose import DEFAULT_PLACEHOLDER

_COMPOSITION_KEYS = ("allOf", "anyOf", "oneOf")
_CONDITIONAL_KEYS = ("if", "then", "else")
_DEFINITION_KEYS = ("$defs", "definitions")


class UnparsableSchemaError(ValueError):
    """Raised when a schema file does not contain valid JSON."""

    def __init__(self, file: str, detail: str) -> None:
        super().__init__(f"Error parsing {file}: {detail}")
        self.file = file
        self.detail = detail


class SchemaTypeExtractor:
    """Walks a schema tree and collects every ``properties.type.const`` string.

    Composition (``allOf``/``anyOf``/``oneOf``) and conditional
    (``if``/``then``/``else``) operators are followed to any depth, as are the
    named definitions under ``$defs``/``definitions``.
    """

    def __init__(self, *, placeholder: str = DEFAULT_PLACEHOLDER) -> None:
        self.placeholder = placeholder

    def extract_text(self, text: str, file: str) -> List[StructuralType]:
        try:
            tree = json.loads(text)
        except (ValueError, RecursionError) as exc:
            raise UnparsableSchemaError(file, str(exc)) from exc
        return self.extract(tree, file)

    def extract(self, tree: Any, file: str) -> List[StructuralType]:
        found: Dict[str, StructuralType] = {}
        if not isinstance(tree, Mapping):
            return []

        def _admit(name: str) -> None:
            if name == self.placeholder or name in found:
                return
            found[name] = StructuralType(
                name=name,
                location=SourceLocation(file=file),
                kind=SourceKind.SCHEMA,
            )

        def collect(node: Mapping[str, Any]) -> None:
            const = _type_const(node)
            if const is not None:
                _admit(const)
            for key in _COMPOSITION_KEYS:
                branches = node.get(key)
                if isinstance(branches, list):
                    for branch in branches:
                        if isinstance(branch, Mapping):
                            collect(branch)
            for key in _CONDITIONAL_KEYS:
                branch = node.get(key)
                if isinstance(branch, Mapping):
                    collect(branch)
            for key in _DEFINITION_KEYS:
                definitions = node.get(key)
                if isinstance(definitions, Mapping):
                    for definition in definitions.values():
                        if isinstance(definition, Mapping):
                            collect(definition)

        collect(tree)
        for name in _block_conditionals(tree):
            _admit(name)
        return list(found.values())


def _type_const(node: Mapping[str, Any]) -> str | None:
    properties = node.get("properties")
    if not isinstance(properties, Mapping):
        return None
    type_node = properties.get("type")
    if not isinstance(type_node, Mapping):
        return None
    const = type_node.get("const")
    return const if isinstance(const, str) else None


def _block_conditionals(tree: Mapping[str, Any]) -> List[str]:
    """Return ``$defs.block.allOf[*].if.properties.type.const`` values."""
    defs = tree.get("$defs")
    block = defs.get("block") if isinstance(defs, Mapping) else None
    conditions = block.get("allOf") if isinstance(block, Mapping) else None
    if not isinstance(conditions, list):
        return []
    names: List[str] = []
    for condition in conditions:
        if not isinstance(condition, Mapping):
            continue
        condition_if = condition.get("if")
        if isinstance(condition_if, Mapping):
            const = _type_const(condition_if)
            if const is not None:
                names.append(const)
    return names


__all__ = ["SchemaTypeExtractor", "UnparsableSchemaError"]
