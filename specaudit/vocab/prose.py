"""Structural type extraction from prose documents."""

from __future__ import annotations

import re
from typing import Dict, List

from ..models import SourceKind, SourceLocation, StructuralType
from .exclusions import ExclusionFilter

DEFAULT_PLACEHOLDER = "text"


class ProseTypeExtractor:
    """Collects ``"type": "<name>"`` declarations from markdown text.

    JSON examples and inline code spans are scanned line by line. The first
    occurrence of a name in a file wins; later duplicates are dropped.
    """

    _JSON_PATTERN = re.compile(r'"type":\s*"([^"]+)"')
    _INLINE_PATTERN = re.compile(r'`"type":\s*"([^"]+)"`')

    def __init__(
        self,
        exclusions: ExclusionFilter | None = None,
        *,
        placeholder: str = DEFAULT_PLACEHOLDER,
    ) -> None:
        self.exclusions = exclusions or ExclusionFilter()
        self.placeholder = placeholder

    def extract(self, text: str, file: str) -> List[StructuralType]:
        found: Dict[str, StructuralType] = {}
        for index, line in enumerate(text.split("\n"), start=1):
            for pattern in (self._JSON_PATTERN, self._INLINE_PATTERN):
                for match in pattern.finditer(line):
                    name = match.group(1)
                    if name in found or not self._admits(name):
                        continue
                    found[name] = StructuralType(
                        name=name,
                        location=SourceLocation(file=file, line=index),
                        kind=SourceKind.PROSE,
                    )
        return list(found.values())

    def _admits(self, name: str) -> bool:
        if name == self.placeholder:
            return False
        return not self.exclusions.excludes(name)


__all__ = ["DEFAULT_PLACEHOLDER", "ProseTypeExtractor"]
