"""Schema loading, meta-schema checks and run-scoped validator cache."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for
from referencing import Registry, Resource
from referencing.exceptions import Unresolvable
from referencing.jsonschema import DRAFT202012

from ..logging import get_logger


class SchemaCatalogError(RuntimeError):
    """Raised when a schema cannot be located or parsed."""


@dataclass
class SchemaCheck:
    """Outcome of checking one schema against its meta-schema."""

    name: str
    ok: bool
    dependencies: List[str] = field(default_factory=list)
    error: Optional[str] = None


class SchemaCatalog:
    """Loads ``*.schema.json`` files from one directory.

    Dependencies name the schemas that must be registered before a schema's
    external ``$ref`` values can resolve. Compiled validators are cached per
    schema name for the lifetime of the catalog. Validators assert
    ``format`` keywords with the draft's format checker.
    """

    def __init__(
        self,
        schema_dir: Path,
        *,
        dependencies: Mapping[str, Sequence[str]] | None = None,
        suffix: str = ".schema.json",
    ) -> None:
        self.schema_dir = Path(schema_dir)
        self.dependencies = {key: list(value) for key, value in (dependencies or {}).items()}
        self.suffix = suffix
        self._schemas: Dict[str, Dict[str, Any]] = {}
        self._validators: Dict[str, Validator] = {}
        self.logger = get_logger("schemas.catalog")

    def names(self) -> List[str]:
        if not self.schema_dir.is_dir():
            return []
        return sorted(
            path.name
            for path in self.schema_dir.iterdir()
            if path.is_file() and path.name.endswith(self.suffix)
        )

    def load(self, name: str) -> Dict[str, Any]:
        if name in self._schemas:
            return self._schemas[name]
        path = self.schema_dir / name
        try:
            schema = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise SchemaCatalogError(f"Schema not found: {name}") from exc
        except IsADirectoryError as exc:
            raise SchemaCatalogError(f"Schema {name} is not a file") from exc
        except (OSError, ValueError, RecursionError) as exc:
            raise SchemaCatalogError(f"Error parsing {name}: {exc}") from exc
        if not isinstance(schema, dict):
            raise SchemaCatalogError(f"Schema {name} must be a JSON object")
        self._schemas[name] = schema
        return schema

    def registry(self, name: str) -> Registry:
        """Return a registry holding ``name`` and its declared dependencies."""
        resources = []
        for schema_name in [*self.dependencies.get(name, []), name]:
            schema = self.load(schema_name)
            resource = Resource.from_contents(schema, default_specification=DRAFT202012)
            resources.append((schema_name, resource))
            schema_id = schema.get("$id")
            if isinstance(schema_id, str) and schema_id != schema_name:
                resources.append((schema_id, resource))
        return Registry().with_resources(resources)

    def check(self, name: str) -> SchemaCheck:
        dependencies = self.dependencies.get(name, [])
        try:
            schema = self.load(name)
            registry = self.registry(name)
            validator_cls = validator_for(schema, default=Draft202012Validator)
            validator_cls.check_schema(schema)
            unresolved = self._unresolved_refs(name, schema, registry)
        except SchemaCatalogError as exc:
            return SchemaCheck(name=name, ok=False, dependencies=dependencies, error=str(exc))
        except SchemaError as exc:
            return SchemaCheck(name=name, ok=False, dependencies=dependencies, error=exc.message)
        if unresolved:
            return SchemaCheck(
                name=name,
                ok=False,
                dependencies=dependencies,
                error=f"Unresolvable $ref: {', '.join(unresolved)}",
            )
        return SchemaCheck(name=name, ok=True, dependencies=dependencies)

    def check_all(self) -> List[SchemaCheck]:
        results = [self.check(name) for name in self.names()]
        failed = sum(1 for result in results if not result.ok)
        self.logger.debug("Checked %d schemas, %d failed", len(results), failed)
        return results

    def validator(self, name: str) -> Validator:
        """Return the compiled validator for ``name``, compiling it on first use."""
        cached = self._validators.get(name)
        if cached is not None:
            return cached
        schema = self.load(name)
        validator_cls = validator_for(schema, default=Draft202012Validator)
        validator = validator_cls(
            schema,
            registry=self.registry(name),
            format_checker=validator_cls.FORMAT_CHECKER,
        )
        self._validators[name] = validator
        return validator

    @staticmethod
    def _unresolved_refs(name: str, schema: Mapping[str, Any], registry: Registry) -> List[str]:
        base_uri = schema.get("$id") if isinstance(schema.get("$id"), str) else name
        resolver = registry.resolver(base_uri=base_uri)
        unresolved: List[str] = []
        for ref in _iter_refs(schema):
            try:
                resolver.lookup(ref)
            except Unresolvable:
                unresolved.append(ref)
        return unresolved


def _iter_refs(node: Any) -> Iterator[str]:
    if isinstance(node, Mapping):
        for key, value in node.items():
            if key == "$ref" and isinstance(value, str):
                yield value
            else:
                yield from _iter_refs(value)
    elif isinstance(node, list):
        for item in node:
            yield from _iter_refs(item)


__all__ = ["SchemaCatalog", "SchemaCatalogError", "SchemaCheck"]
