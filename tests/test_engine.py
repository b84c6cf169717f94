"""End-to-end tests for the consistency engine over a temporary corpus."""

from __future__ import annotations

from pathlib import Path

import pytest

from specaudit.engine import ConsistencyEngine
from specaudit.models import SourceLocation
from tests._fixtures.corpus_builder import CorpusBuilder

CORE_DOC = """
# Core Blocks

## Getting Started

See [here](#getting-started) and [other](other.md#intro).
Also [missing](nope.md), as described in (see Section 4.2).

```json
{"type": "paragraph", "media": {"type": "image/png"}}
```

Inline `"type": "sidebar"` is documented too.
"""

CONTENT_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$defs": {
        "paragraph": {"properties": {"type": {"const": "paragraph"}}},
        "heading": {"properties": {"type": {"const": "heading"}}},
    },
}


@pytest.fixture
def project(corpus_builder: CorpusBuilder) -> CorpusBuilder:
    corpus_builder.write({"spec/core.md": CORE_DOC, "spec/other.md": "# Intro\n"})
    corpus_builder.write_json("schemas/content.schema.json", CONTENT_SCHEMA)
    return corpus_builder


def test_check_types_reconciles_prose_with_schemas(project: CorpusBuilder) -> None:
    report = project.engine().check_types()

    assert report.synced == ["paragraph"]
    assert [entry.name for entry in report.prose_only] == ["sidebar"]
    assert report.prose_only[0].location == SourceLocation("spec/core.md", 12)
    assert [entry.name for entry in report.schema_only] == ["heading"]
    assert report.schema_only[0].location == SourceLocation("schemas/content.schema.json")
    assert report.prose_files == 2
    assert report.schema_files == 1
    assert report.diagnostics == []


def test_mime_types_in_prose_are_never_admitted(project: CorpusBuilder) -> None:
    report = project.engine().check_types()

    names = set(report.synced) | {entry.name for entry in report.prose_only}
    assert "image/png" not in names


def test_check_references_resolves_scenarios(project: CorpusBuilder) -> None:
    report = project.engine().check_references()

    assert [ref.target for ref in report.valid] == [
        "#getting-started",
        "other.md#intro",
        "section:4.2",
        "section:4.2",
    ]
    assert [ref.target for ref in report.broken] == ["nope.md"]
    assert report.broken[0].file == "spec/core.md"
    assert report.broken[0].line == 6
    assert report.prose_files == 2
    assert report.sections_indexed == 3
    assert report.references_found == 5


def test_reports_are_identical_across_runs(project: CorpusBuilder) -> None:
    engine = project.engine()

    assert engine.check_types() == engine.check_types()
    assert engine.check_references() == engine.check_references()


def test_unparsable_schema_becomes_diagnostic(project: CorpusBuilder) -> None:
    project.write({"schemas/broken.schema.json": "{ not json"})

    report = project.engine().check_types()

    assert report.schema_files == 2
    assert [diagnostic.file for diagnostic in report.diagnostics] == [
        "schemas/broken.schema.json"
    ]
    assert report.diagnostics[0].message.startswith("Error parsing schemas/broken.schema.json")
    assert report.synced == ["paragraph"]


def test_schema_json_beyond_parser_limits_becomes_diagnostic(project: CorpusBuilder) -> None:
    project.write({"schemas/huge.schema.json": '{"x": ' + "9" * 5000 + "}"})

    report = project.engine().check_types()

    assert [diagnostic.file for diagnostic in report.diagnostics] == ["schemas/huge.schema.json"]
    assert report.synced == ["paragraph"]
    assert [entry.name for entry in report.schema_only] == ["heading"]


def test_undecodable_prose_file_is_reported_and_skipped(project: CorpusBuilder) -> None:
    (project.path() / "spec" / "binary.md").write_bytes(b"\xff\xfe\x00garbage")

    types = project.engine().check_types()
    refs = project.engine().check_references()

    assert [diagnostic.file for diagnostic in types.diagnostics] == ["spec/binary.md"]
    assert types.prose_files == 3
    assert [diagnostic.file for diagnostic in refs.diagnostics] == ["spec/binary.md"]
    assert refs.prose_files == 3


def test_cross_document_link_to_unreadable_file_still_resolves(
    corpus_builder: CorpusBuilder,
) -> None:
    corpus_builder.write({"spec/index.md": "[raw](binary.md)\n"})
    (corpus_builder.path() / "spec" / "binary.md").write_bytes(b"\xff\xfe")

    report = corpus_builder.engine().check_references()

    assert [ref.target for ref in report.valid] == ["binary.md"]


def test_empty_project_produces_empty_reports(corpus_builder: CorpusBuilder) -> None:
    engine = corpus_builder.engine()

    types = engine.check_types()
    refs = engine.check_references()

    assert types.synced == [] and not types.has_discrepancies
    assert types.prose_files == 0 and types.schema_files == 0
    assert refs.references_found == 0 and refs.broken == []


def test_vocabulary_config_is_applied(corpus_builder: CorpusBuilder) -> None:
    corpus_builder.write(
        {
            ".specaudit.yml": """
            vocabulary:
              extra_exclusions: [sidebar]
              keep: [keyword]
            """,
            "spec/blocks.md": """
            {"type": "sidebar"}
            {"type": "keyword"}
            """,
        }
    )

    report = corpus_builder.engine().check_types()

    assert [entry.name for entry in report.prose_only] == ["keyword"]


def test_for_path_rejects_missing_and_non_directory_paths(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        ConsistencyEngine.for_path(tmp_path / "missing")

    file_path = tmp_path / "file.txt"
    file_path.write_text("x", encoding="utf-8")
    with pytest.raises(NotADirectoryError):
        ConsistencyEngine.for_path(file_path)


def test_for_path_loads_project_config(corpus_builder: CorpusBuilder) -> None:
    corpus_builder.write({".specaudit.yml": "corpus:\n  prose_dir: docs\n"})

    engine = ConsistencyEngine.for_path(corpus_builder.path())

    assert engine.config.prose_root == corpus_builder.path().resolve() / "docs"
