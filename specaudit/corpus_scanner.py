"""Corpus enumeration for prose documents and schema definitions."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .logging import get_logger

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
}


@dataclass
class IgnoreRule:
    """Represents an exclude pattern from .specaudit.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            return self.directory_only and rel_path.startswith(f"{self.pattern}/")

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def _build_ignore_rule(pattern: str) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        has_slash="/" in pattern,
    )


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    return any(rule.matches(rel_path, is_dir) for rule in rules)


def _iter_files(root: Path, rules: Sequence[IgnoreRule]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        kept_dirs = []
        for name in sorted(dirnames):
            if name in _EXCLUDED_DIRS:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _should_ignore(rel_path, True, rules):
                continue
            kept_dirs.append(name)
        # os.walk honours in-place edits, which also fixes the descent order.
        dirnames[:] = kept_dirs

        for filename in sorted(filenames):
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _should_ignore(rel_path, False, rules):
                continue
            yield current_dir / filename


class CorpusScanner:
    """Lists corpus files by suffix in a stable, lexical traversal order."""

    def __init__(self, exclude_paths: Iterable[str] = ()) -> None:
        self._rules: List[IgnoreRule] = []
        for pattern in exclude_paths:
            rule = _build_ignore_rule(pattern)
            if rule is not None:
                self._rules.append(rule)
        self.logger = get_logger("corpus_scanner")

    def scan(self, directory: Path, suffixes: Sequence[str]) -> List[Path]:
        """Return files under ``directory`` whose names end with one of ``suffixes``.

        A missing directory yields an empty list.
        """
        directory = Path(directory)
        if not directory.is_dir():
            self.logger.debug("Corpus directory not found: %s", directory)
            return []

        matched = [
            path
            for path in _iter_files(directory, self._rules)
            if path.name.endswith(tuple(suffixes))
        ]
        self.logger.debug("Found %d files under %s", len(matched), directory)
        return matched


def relative_path(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` as a POSIX string."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return Path(os.path.relpath(path, root)).as_posix()


__all__ = ["CorpusScanner", "IgnoreRule", "relative_path"]
