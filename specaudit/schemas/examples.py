"""Validation of example documents against their schemas."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List

from ..config import ExampleValidation
from ..logging import get_logger
from .catalog import SchemaCatalog, SchemaCatalogError

VALID = "valid"
INVALID = "invalid"
MISSING = "missing"
ERROR = "error"


@dataclass
class ExampleCheck:
    """Outcome of validating one file of one example document."""

    example: str
    file: str
    schema: str
    status: str
    errors: List[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return self.status in (INVALID, ERROR)


class ExampleValidator:
    """Runs the configured ``(schema, file)`` checks over every example directory.

    Required files that are absent are reported as ``missing``; optional ones
    are skipped without a result.
    """

    def __init__(
        self,
        catalog: SchemaCatalog,
        examples_dir: Path,
        validations: Iterable[ExampleValidation],
    ) -> None:
        self.catalog = catalog
        self.examples_dir = Path(examples_dir)
        self.validations = list(validations)
        self.logger = get_logger("schemas.examples")

    def example_dirs(self) -> List[str]:
        if not self.examples_dir.is_dir():
            return []
        return sorted(entry.name for entry in self.examples_dir.iterdir() if entry.is_dir())

    def validate_all(self) -> List[ExampleCheck]:
        results: List[ExampleCheck] = []
        for example in self.example_dirs():
            results.extend(self.validate_example(example))
        return results

    def validate_example(self, example: str) -> List[ExampleCheck]:
        results: List[ExampleCheck] = []
        example_path = self.examples_dir / example
        for validation in self.validations:
            path = example_path / validation.file
            if not path.exists():
                if validation.required:
                    results.append(
                        ExampleCheck(example, validation.file, validation.schema, MISSING)
                    )
                continue
            results.append(self._validate_file(example, path, validation))
        return results

    def _validate_file(
        self, example: str, path: Path, validation: ExampleValidation
    ) -> ExampleCheck:
        try:
            validator = self.catalog.validator(validation.schema)
            instance = json.loads(path.read_text(encoding="utf-8"))
        except (SchemaCatalogError, OSError, ValueError, RecursionError) as exc:
            self.logger.debug("Could not validate %s/%s: %s", example, validation.file, exc)
            return ExampleCheck(
                example, validation.file, validation.schema, ERROR, errors=[f"Error: {exc}"]
            )

        errors = sorted(
            validator.iter_errors(instance),
            key=lambda error: [str(part) for part in error.absolute_path],
        )
        if not errors:
            return ExampleCheck(example, validation.file, validation.schema, VALID)
        messages = [f"{_instance_path(error.absolute_path)}: {error.message}" for error in errors]
        return ExampleCheck(example, validation.file, validation.schema, INVALID, errors=messages)


def _instance_path(parts: Iterable[object]) -> str:
    joined = "/".join(str(part) for part in parts)
    return f"/{joined}" if joined else "/"


__all__ = ["ERROR", "ExampleCheck", "ExampleValidator", "INVALID", "MISSING", "VALID"]
