"""Heading and explicit anchor indexing for prose documents."""

from __future__ import annotations

import re
from collections import defaultdict
from typing import DefaultDict, Iterable, Iterator, List, Set

from ..models import Heading

_HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$")
_ANCHOR_PATTERN = re.compile(r"""<a\s+name=["']([^"']+)["']""", re.IGNORECASE)


def slugify(title: str) -> str:
    """Return the GitHub-style anchor for a heading title."""
    slug = title.lower()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


class AnchorIndexBuilder:
    """Extracts headings and ``<a name="...">`` anchors line by line."""

    def extract(self, text: str, file: str) -> List[Heading]:
        headings: List[Heading] = []
        for index, line in enumerate(text.split("\n"), start=1):
            match = _HEADING_PATTERN.match(line)
            if match:
                title = match.group(2)
                headings.append(Heading(slug=slugify(title), title=title, file=file, line=index))
            for anchor in _ANCHOR_PATTERN.finditer(line):
                name = anchor.group(1)
                headings.append(
                    Heading(slug=name, title=f"(anchor: {name})", file=file, line=index)
                )
        return headings


class AnchorIndex:
    """Global ``(file, slug)`` index over every heading in the corpus.

    Headings sharing a slug inside one file are all retained; lookups only
    answer whether at least one exists.
    """

    def __init__(self, headings: Iterable[Heading] = ()) -> None:
        self._headings: List[Heading] = []
        self._slugs: DefaultDict[str, Set[str]] = defaultdict(set)
        self.add(headings)

    def add(self, headings: Iterable[Heading]) -> None:
        for heading in headings:
            self._headings.append(heading)
            self._slugs[heading.file].add(heading.slug)

    def contains(self, file: str, slug: str) -> bool:
        return slug in self._slugs.get(file, ())

    def for_file(self, file: str) -> List[Heading]:
        return [heading for heading in self._headings if heading.file == file]

    def __iter__(self) -> Iterator[Heading]:
        return iter(self._headings)

    def __len__(self) -> int:
        return len(self._headings)


__all__ = ["AnchorIndex", "AnchorIndexBuilder", "slugify"]
