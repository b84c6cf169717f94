"""Consistency checks between a format's prose specification and its JSON schemas."""

from .engine import ConsistencyEngine
from .models import (
    FileDiagnostic,
    Heading,
    ReconciliationReport,
    Reference,
    SourceKind,
    SourceLocation,
    StructuralType,
    ValidationReport,
)

__version__ = "0.1.0"

__all__ = [
    "ConsistencyEngine",
    "FileDiagnostic",
    "Heading",
    "ReconciliationReport",
    "Reference",
    "SourceKind",
    "SourceLocation",
    "StructuralType",
    "ValidationReport",
]
