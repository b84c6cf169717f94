"""Cross-reference extraction from prose documents."""

from __future__ import annotations

import re
from typing import List

from ..models import Reference

SECTION_PREFIX = "section:"
_EXTERNAL_SCHEMES = ("http://", "https://")


class ReferenceExtractor:
    """Finds markdown links and narrative section citations.

    Every match is recorded, so a line citing the same target twice yields two
    references. Parenthesised citations also match the looser narrative
    pattern and are reported twice; both resolve as valid.
    """

    _LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
    _SECTION_PATTERN = re.compile(r"see\s+(section\s+)?(\d+(\.\d+)*)", re.IGNORECASE)
    _PAREN_SECTION_PATTERN = re.compile(r"\(see\s+[Ss]ection\s+(\d+(\.\d+)*)\)")

    def extract(self, text: str, file: str) -> List[Reference]:
        references: List[Reference] = []
        for index, line in enumerate(text.split("\n"), start=1):
            for match in self._LINK_PATTERN.finditer(line):
                target = match.group(2)
                if target.startswith(_EXTERNAL_SCHEMES):
                    continue
                references.append(
                    Reference(target=target, file=file, line=index, context=match.group(0))
                )

            for match in self._SECTION_PATTERN.finditer(line):
                references.append(
                    Reference(
                        target=f"{SECTION_PREFIX}{match.group(2)}",
                        file=file,
                        line=index,
                        context=match.group(0),
                    )
                )

            for match in self._PAREN_SECTION_PATTERN.finditer(line):
                references.append(
                    Reference(
                        target=f"{SECTION_PREFIX}{match.group(1)}",
                        file=file,
                        line=index,
                        context=match.group(0),
                    )
                )
        return references


__all__ = ["ReferenceExtractor", "SECTION_PREFIX"]
