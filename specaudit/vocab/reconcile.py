"""Partition of prose and schema type vocabularies."""

from __future__ import annotations

from typing import Dict, Iterable, List

from ..models import ReconciliationReport, StructuralType


def reconcile(
    prose_types: Iterable[StructuralType],
    schema_types: Iterable[StructuralType],
) -> ReconciliationReport:
    """Split the two vocabularies into synced, prose-only and schema-only names.

    Inputs are the concatenated per-file extraction results in processing
    order. Membership only depends on names; when a name occurs in several
    files the first location seen is the one reported.
    """
    prose_first = _first_by_name(prose_types)
    schema_first = _first_by_name(schema_types)

    synced = [name for name in prose_first if name in schema_first]
    prose_only = [entry for name, entry in prose_first.items() if name not in schema_first]
    schema_only = [entry for name, entry in schema_first.items() if name not in prose_first]
    return ReconciliationReport(synced=synced, prose_only=prose_only, schema_only=schema_only)


def _first_by_name(types: Iterable[StructuralType]) -> Dict[str, StructuralType]:
    first: Dict[str, StructuralType] = {}
    for entry in types:
        first.setdefault(entry.name, entry)
    return first


def vocabulary(types: Iterable[StructuralType]) -> List[str]:
    """Return distinct names in first-seen order."""
    return list(_first_by_name(types))


__all__ = ["reconcile", "vocabulary"]
