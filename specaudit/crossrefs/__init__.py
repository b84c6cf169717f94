"""Cross-reference indexing, extraction and resolution."""

from .anchors import AnchorIndex, AnchorIndexBuilder, slugify
from .references import SECTION_PREFIX, ReferenceExtractor
from .resolver import ReferenceResolver

__all__ = [
    "AnchorIndex",
    "AnchorIndexBuilder",
    "ReferenceExtractor",
    "ReferenceResolver",
    "SECTION_PREFIX",
    "slugify",
]
