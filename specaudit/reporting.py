"""Text and JSON rendering of specaudit reports."""

from __future__ import annotations

from dataclasses import asdict
from typing import Dict, List, Sequence

from .models import ReconciliationReport, StructuralType, ValidationReport
from .schemas import CoverageReport, ExampleCheck, SchemaCheck
from .schemas.examples import INVALID, MISSING, VALID

RULE = "=" * 60


def render_types(report: ReconciliationReport) -> str:
    lines: List[str] = [
        f"Found {report.prose_files} spec files",
        f"Found {report.schema_files} schema files",
        "",
    ]
    for diagnostic in report.diagnostics:
        lines.append(f"! {diagnostic.message}")
    if report.diagnostics:
        lines.append("")

    lines.append(RULE)
    if report.synced:
        lines.append(f"\n✓ {len(report.synced)} types are synchronized:")
        lines.extend(f"    {name}" for name in sorted(report.synced))

    if report.prose_only:
        lines.append(f"\n⚠ {len(report.prose_only)} types documented in spec but not in schema:")
        for entry in report.prose_only:
            lines.append(f"    {entry.name}")
            lines.append(f"      Source: {entry.location}")

    if report.schema_only:
        lines.append(f"\n⚠ {len(report.schema_only)} types in schema but not documented in spec:")
        for entry in report.schema_only:
            lines.append(f"    {entry.name}")
            lines.append(f"      Source: {entry.location}")

    lines.append("\n" + RULE)
    if report.has_discrepancies:
        lines.append("\nSpec-schema sync check found discrepancies.")
    else:
        lines.append("\nAll documented types have schema definitions.")
    return "\n".join(lines) + "\n"


def render_references(report: ValidationReport) -> str:
    lines: List[str] = [
        f"Found {report.prose_files} spec files",
        f"Indexed {report.sections_indexed} sections/anchors",
        f"Found {report.references_found} cross-references",
        "",
        RULE,
        f"\n✓ {len(report.valid)} valid references",
    ]
    if report.broken:
        lines.append(f"\n✗ {len(report.broken)} broken references:")
        for ref in report.broken:
            lines.append(f"\n  {ref.file}:{ref.line}")
            lines.append(f"    Target: {ref.target}")
            lines.append(f"    Context: {ref.context}")

    lines.append("\n" + RULE)
    if report.broken:
        lines.append("\nCross-reference validation found issues.")
    else:
        lines.append("\nAll cross-references are valid.")
    return "\n".join(lines) + "\n"


def render_schema_checks(results: Sequence[SchemaCheck]) -> str:
    lines: List[str] = ["Validating JSON schemas...", ""]
    for result in results:
        if result.ok:
            suffix = f" (refs: {', '.join(result.dependencies)})" if result.dependencies else ""
            lines.append(f"  ✓ {result.name}{suffix}")
        else:
            lines.append(f"  ✗ {result.name}")
            lines.append(f"    Error: {result.error}")
    lines.append("")
    if any(not result.ok for result in results):
        lines.append("Schema validation failed!")
    else:
        lines.append("All schemas valid.")
    return "\n".join(lines) + "\n"


def render_examples(results: Sequence[ExampleCheck]) -> str:
    lines: List[str] = ["Validating example documents...", ""]
    current = None
    for result in results:
        if result.example != current:
            if current is not None:
                lines.append("")
            lines.append(f"{result.example}/")
            current = result.example
        if result.status == VALID:
            lines.append(f"  ✓ {result.file}")
        elif result.status == MISSING:
            lines.append(f"  - {result.file} (not found, skipping)")
        else:
            lines.append(f"  ✗ {result.file}")
            prefix = "    - " if result.status == INVALID else "    "
            lines.extend(f"{prefix}{message}" for message in result.errors)
    lines.append("")
    if any(result.failed for result in results):
        lines.append("Example validation failed!")
    else:
        lines.append("All examples valid.")
    return "\n".join(lines) + "\n"


def render_coverage(report: CoverageReport) -> str:
    lines: List[str] = ["Extension Coverage:", "=" * 50]
    for result in report.extensions:
        lines.append(_coverage_line(result.name, result.covered, result.detail))
    lines.extend(["", "Schema Coverage:", "=" * 50])
    for result in report.schemas:
        lines.append(_coverage_line(result.name, result.covered, result.detail))

    covered_extensions = sum(1 for result in report.extensions if result.covered)
    covered_schemas = sum(1 for result in report.schemas if result.covered)
    lines.extend(
        [
            "",
            "=" * 50,
            "",
            "Summary:",
            f"  Extensions: {covered_extensions}/{len(report.extensions)} covered",
            f"  Schemas: {covered_schemas}/{len(report.schemas)} covered",
            "",
        ]
    )
    if report.has_gaps:
        lines.append("Missing coverage detected.")
    else:
        lines.append("All extensions and schemas have example coverage.")
    return "\n".join(lines) + "\n"


def _coverage_line(name: str, covered: bool, detail: str | None) -> str:
    if covered:
        return f"  ✓ {name} - {detail}"
    return f"  ✗ {name} - NO EXAMPLE"


def types_to_dict(report: ReconciliationReport) -> Dict[str, object]:
    return {
        "synced": list(report.synced),
        "prose_only": [_type_to_dict(entry) for entry in report.prose_only],
        "schema_only": [_type_to_dict(entry) for entry in report.schema_only],
        "prose_files": report.prose_files,
        "schema_files": report.schema_files,
        "diagnostics": [asdict(diagnostic) for diagnostic in report.diagnostics],
        "has_discrepancies": report.has_discrepancies,
    }


def _type_to_dict(entry: StructuralType) -> Dict[str, object]:
    return {
        "name": entry.name,
        "location": asdict(entry.location),
        "kind": entry.kind.value,
    }


def references_to_dict(report: ValidationReport) -> Dict[str, object]:
    return {
        "prose_files": report.prose_files,
        "sections_indexed": report.sections_indexed,
        "references_found": report.references_found,
        "valid": [asdict(ref) for ref in report.valid],
        "broken": [asdict(ref) for ref in report.broken],
        "diagnostics": [asdict(diagnostic) for diagnostic in report.diagnostics],
    }


__all__ = [
    "references_to_dict",
    "render_coverage",
    "render_examples",
    "render_references",
    "render_schema_checks",
    "render_types",
    "types_to_dict",
]
