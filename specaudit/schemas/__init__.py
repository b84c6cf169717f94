"""Schema compilation checks, example validation and coverage reporting."""

from .catalog import SchemaCatalog, SchemaCatalogError, SchemaCheck
from .coverage import CoverageReport, CoverageReporter, CoverageResult
from .examples import ExampleCheck, ExampleValidator

__all__ = [
    "CoverageReport",
    "CoverageReporter",
    "CoverageResult",
    "ExampleCheck",
    "ExampleValidator",
    "SchemaCatalog",
    "SchemaCatalogError",
    "SchemaCheck",
]
