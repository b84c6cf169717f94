"""Resolution of extracted references against the anchor index and corpus."""

from __future__ import annotations

import posixpath
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from ..logging import get_logger
from ..models import Reference
from .anchors import AnchorIndex
from .references import SECTION_PREFIX


class ReferenceResolver:
    """Classifies references as valid or broken.

    Rules apply in order: ``#anchor`` in the same file, links into another
    prose document (optionally with ``#anchor``), ``section:`` citations,
    other relative paths checked on disk, and finally a bare anchor name in
    the same file. Section citations are always valid; their numbering is not
    checked.
    """

    def __init__(
        self,
        root: Path,
        index: AnchorIndex,
        corpus_files: Iterable[str],
        *,
        prose_extensions: Sequence[str] = (".md",),
    ) -> None:
        self.root = root
        self.index = index
        self.corpus_files = frozenset(corpus_files)
        self.prose_extensions = tuple(prose_extensions)
        self.logger = get_logger("crossrefs.resolver")

    def is_valid(self, ref: Reference) -> bool:
        target = ref.target

        if target.startswith("#"):
            return self.index.contains(ref.file, target[1:])

        if any(extension in target for extension in self.prose_extensions):
            file_part, _, anchor = target.partition("#")
            resolved = posixpath.normpath(posixpath.join(posixpath.dirname(ref.file), file_part))
            if resolved not in self.corpus_files:
                return False
            if anchor:
                return self.index.contains(resolved, anchor)
            return True

        if target.startswith(SECTION_PREFIX):
            return True

        if "/" in target:
            return (self.root / posixpath.dirname(ref.file) / target).exists()

        return self.index.contains(ref.file, target)

    def resolve(self, references: Iterable[Reference]) -> Tuple[List[Reference], List[Reference]]:
        """Return ``(valid, broken)`` preserving input order."""
        valid: List[Reference] = []
        broken: List[Reference] = []
        for ref in references:
            if self.is_valid(ref):
                valid.append(ref)
            else:
                self.logger.debug("Broken reference %s:%d -> %s", ref.file, ref.line, ref.target)
                broken.append(ref)
        return valid, broken


__all__ = ["ReferenceResolver"]
