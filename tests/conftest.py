from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.corpus_builder import CorpusBuilder


@pytest.fixture
def corpus_builder(tmp_path: Path) -> CorpusBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return CorpusBuilder(tmp_path)
