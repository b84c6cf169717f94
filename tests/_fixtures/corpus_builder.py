"""Helper utilities for constructing temporary specification projects in tests."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any, Mapping

from specaudit.config import load_config
from specaudit.engine import ConsistencyEngine


class CorpusBuilder:
    """Utility for writing prose, schema and example files into a throwaway project."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def write_json(self, relative: str, payload: Any) -> None:
        """Write a JSON document into the project."""
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def engine(self) -> ConsistencyEngine:
        """Return an engine configured from the project's .specaudit.yml."""
        return ConsistencyEngine(load_config(self.root))

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["CorpusBuilder"]
