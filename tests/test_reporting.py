"""Tests for text rendering of reports."""

from __future__ import annotations

from specaudit.models import (
    ReconciliationReport,
    Reference,
    SourceKind,
    SourceLocation,
    StructuralType,
    ValidationReport,
)
from specaudit.reporting import render_coverage, render_references, render_types, types_to_dict
from specaudit.schemas import CoverageReport, CoverageResult


def _report() -> ReconciliationReport:
    return ReconciliationReport(
        synced=["paragraph", "heading"],
        prose_only=[
            StructuralType("sidebar", SourceLocation("spec/a.md", 4), SourceKind.PROSE)
        ],
        prose_files=2,
        schema_files=1,
    )


def test_render_types_lists_synced_sorted_and_sources() -> None:
    text = render_types(_report())

    assert text.startswith("Found 2 spec files\nFound 1 schema files\n")
    assert "✓ 2 types are synchronized:\n    heading\n    paragraph" in text
    assert "⚠ 1 types documented in spec but not in schema:" in text
    assert "      Source: spec/a.md:4" in text
    assert "Spec-schema sync check found discrepancies." in text


def test_types_to_dict_uses_plain_values() -> None:
    data = types_to_dict(_report())

    assert data["prose_only"] == [
        {"name": "sidebar", "location": {"file": "spec/a.md", "line": 4}, "kind": "prose"}
    ]
    assert data["has_discrepancies"] is True


def test_render_references_without_broken_links() -> None:
    ref = Reference("#a", "spec/a.md", 1, "[a](#a)")
    text = render_references(ValidationReport(references=[ref], valid=[ref], prose_files=1))

    assert "Found 1 cross-references" in text
    assert "✗" not in text
    assert text.rstrip().endswith("All cross-references are valid.")


def test_render_coverage_summary() -> None:
    report = CoverageReport(
        extensions=[CoverageResult("forms", True, "examples/alpha")],
        schemas=[CoverageResult("legal.schema.json", False)],
    )

    text = render_coverage(report)

    assert "  ✓ forms - examples/alpha" in text
    assert "  ✗ legal.schema.json - NO EXAMPLE" in text
    assert "  Extensions: 1/1 covered" in text
    assert "  Schemas: 0/1 covered" in text
    assert text.rstrip().endswith("Missing coverage detected.")
