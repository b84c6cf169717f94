"""Core data models shared across specaudit components."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class SourceKind(str, Enum):
    """Corpus a structural type was extracted from."""

    PROSE = "prose"
    SCHEMA = "schema"


@dataclass(frozen=True)
class SourceLocation:
    """Project-relative file path and optional 1-based line number."""

    file: str
    line: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.file}:{self.line}" if self.line else self.file


@dataclass(frozen=True)
class StructuralType:
    """A block or mark type name declared in prose or in a schema."""

    name: str
    location: SourceLocation
    kind: SourceKind


@dataclass(frozen=True)
class Heading:
    """Addressable point in a prose document, derived from a heading or an explicit anchor."""

    slug: str
    title: str
    file: str
    line: int


@dataclass(frozen=True)
class Reference:
    """One unresolved reference occurrence found in a prose document."""

    target: str
    file: str
    line: int
    context: str


@dataclass(frozen=True)
class FileDiagnostic:
    """File-level problem that prevented a file from contributing to a report."""

    file: str
    message: str


@dataclass
class ReconciliationReport:
    """Partition of the prose and schema type vocabularies."""

    synced: List[str] = field(default_factory=list)
    prose_only: List[StructuralType] = field(default_factory=list)
    schema_only: List[StructuralType] = field(default_factory=list)
    prose_files: int = 0
    schema_files: int = 0
    diagnostics: List[FileDiagnostic] = field(default_factory=list)

    @property
    def has_discrepancies(self) -> bool:
        return bool(self.prose_only or self.schema_only)


@dataclass
class ValidationReport:
    """Outcome of resolving every cross-reference in the prose corpus."""

    headings: List[Heading] = field(default_factory=list)
    references: List[Reference] = field(default_factory=list)
    valid: List[Reference] = field(default_factory=list)
    broken: List[Reference] = field(default_factory=list)
    prose_files: int = 0
    diagnostics: List[FileDiagnostic] = field(default_factory=list)

    @property
    def sections_indexed(self) -> int:
        return len(self.headings)

    @property
    def references_found(self) -> int:
        return len(self.references)
