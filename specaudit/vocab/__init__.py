"""Type vocabulary extraction and reconciliation."""

from .exclusions import DEFAULT_EXCLUSIONS, ExclusionFilter, ExclusionRule, build_exclusion_filter
from .prose import DEFAULT_PLACEHOLDER, ProseTypeExtractor
from .reconcile import reconcile, vocabulary
from .schema import SchemaTypeExtractor, UnparsableSchemaError

__all__ = [
    "DEFAULT_EXCLUSIONS",
    "DEFAULT_PLACEHOLDER",
    "ExclusionFilter",
    "ExclusionRule",
    "ProseTypeExtractor",
    "SchemaTypeExtractor",
    "UnparsableSchemaError",
    "build_exclusion_filter",
    "reconcile",
    "vocabulary",
]
