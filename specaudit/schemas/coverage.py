"""Example coverage for extensions and schemas."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from ..config import SpecAuditConfig
from ..logging import get_logger


@dataclass
class CoverageResult:
    """Whether an extension or schema is exercised by at least one example."""

    name: str
    covered: bool
    detail: Optional[str] = None


@dataclass
class CoverageReport:
    extensions: List[CoverageResult] = field(default_factory=list)
    schemas: List[CoverageResult] = field(default_factory=list)

    @property
    def has_gaps(self) -> bool:
        return any(not result.covered for result in (*self.extensions, *self.schemas))


class CoverageReporter:
    """Matches extensions and schemas to the example documents that use them."""

    def __init__(
        self,
        *,
        extensions_dir: Path,
        examples_dir: Path,
        schema_names: Sequence[str],
        coverage_map: Mapping[str, Sequence[str]],
        shared_schemas: Sequence[str] = (),
        extension_schemas: Sequence[str] = (),
        extension_prefix: str = "codex.",
        schema_suffix: str = ".schema.json",
    ) -> None:
        self.extensions_dir = Path(extensions_dir)
        self.examples_dir = Path(examples_dir)
        self.schema_names = list(schema_names)
        self.coverage_map = {key: list(value) for key, value in coverage_map.items()}
        self.shared_schemas = set(shared_schemas)
        self.extension_schemas = set(extension_schemas)
        self.extension_prefix = extension_prefix
        self.schema_suffix = schema_suffix
        self._manifest_cache: Dict[str, List[str]] = {}
        self.logger = get_logger("schemas.coverage")

    @classmethod
    def from_config(cls, config: SpecAuditConfig, schema_names: Sequence[str]) -> "CoverageReporter":
        return cls(
            extensions_dir=config.extensions_root,
            examples_dir=config.examples_root,
            schema_names=schema_names,
            coverage_map=config.schemas.coverage,
            shared_schemas=config.schemas.shared,
            extension_schemas=config.schemas.extension_schemas,
            extension_prefix=config.schemas.extension_prefix,
            schema_suffix=config.corpus.schema_suffix,
        )

    def report(self) -> CoverageReport:
        examples = _subdirectories(self.examples_dir)
        report = CoverageReport()

        for extension in _subdirectories(self.extensions_dir):
            matching = [example for example in examples if self._uses_extension(example, extension)]
            report.extensions.append(
                CoverageResult(
                    name=extension,
                    covered=bool(matching),
                    detail=f"{self.examples_dir.name}/{matching[0]}" if matching else None,
                )
            )

        for schema in self.schema_names:
            if schema in self.shared_schemas:
                continue
            matching = [example for example in examples if self._uses_schema(example, schema)]
            report.schemas.append(
                CoverageResult(
                    name=schema,
                    covered=bool(matching),
                    detail=f"{len(matching)} example(s)" if matching else None,
                )
            )

        report.extensions.sort(key=lambda result: result.name)
        report.schemas.sort(key=lambda result: result.name)
        return report

    def _uses_extension(self, example: str, extension: str) -> bool:
        declared = self._manifest_extensions(example)
        return f"{self.extension_prefix}{extension}" in declared or extension in declared

    def _uses_schema(self, example: str, schema: str) -> bool:
        example_path = self.examples_dir / example
        for file in self.coverage_map.get(schema, []):
            if (example_path / file).exists():
                return True
        extension = schema[: -len(self.schema_suffix)] if schema.endswith(self.schema_suffix) else schema
        if extension in self.extension_schemas:
            return self._uses_extension(example, extension)
        return False

    def _manifest_extensions(self, example: str) -> List[str]:
        if example in self._manifest_cache:
            return self._manifest_cache[example]
        manifest_path = self.examples_dir / example / "manifest.json"
        ids: List[str] = []
        try:
            manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            manifest = None
        except (OSError, ValueError, RecursionError) as exc:
            self.logger.debug("Ignoring unreadable manifest %s: %s", manifest_path, exc)
            manifest = None
        extensions = manifest.get("extensions") if isinstance(manifest, dict) else None
        if isinstance(extensions, list):
            for entry in extensions:
                if isinstance(entry, dict) and isinstance(entry.get("id"), str):
                    ids.append(entry["id"])
        self._manifest_cache[example] = ids
        return ids


def _subdirectories(directory: Path) -> List[str]:
    if not directory.is_dir():
        return []
    return sorted(entry.name for entry in directory.iterdir() if entry.is_dir())


__all__ = ["CoverageReport", "CoverageReporter", "CoverageResult"]
