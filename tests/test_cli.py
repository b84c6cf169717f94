"""CLI parser and command behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from specaudit.cli import _build_parser, main
from tests._fixtures.corpus_builder import CorpusBuilder


@pytest.fixture
def project(corpus_builder: CorpusBuilder) -> Path:
    corpus_builder.write(
        {
            ".specaudit.yml": """
            schemas:
              dependencies: {}
              examples: []
              coverage: {}
            """,
            "spec/core.md": """
            # Core

            Link to [core](#core) and [gone](missing.md).

            {"type": "paragraph"}
            """,
        }
    )
    corpus_builder.write_json(
        "schemas/content.schema.json",
        {"$defs": {"paragraph": {"properties": {"type": {"const": "paragraph"}}}}},
    )
    return corpus_builder.path()


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "types"])
    assert args.verbose is True
    assert args.command == "types"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["refs", "-v"])
    assert args.verbose is True
    assert args.command == "refs"


def test_cli_defaults_to_current_directory() -> None:
    args = _build_parser().parse_args(["coverage"])
    assert args.path == "."
    assert args.json is False
    assert args.strict is False
    assert args.verbose is False


def test_cli_accepts_json_and_strict_flags() -> None:
    args = _build_parser().parse_args(["all", "some/project", "--json", "--strict"])
    assert args.command == "all"
    assert args.path == "some/project"
    assert args.json is True
    assert args.strict is True


def test_types_json_output(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["types", str(project), "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["synced"] == ["paragraph"]
    assert payload["prose_only"] == []
    assert payload["schema_only"] == []
    assert payload["has_discrepancies"] is False


def test_refs_text_output_is_advisory(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["refs", str(project)])

    out = capsys.readouterr().out
    assert "✓ 1 valid references" in out
    assert "✗ 1 broken references:" in out
    assert "spec/core.md:3" in out
    assert "Target: missing.md" in out


def test_refs_strict_exits_non_zero(project: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["refs", str(project), "--strict"])
    assert excinfo.value.code == 1


def test_schemas_failure_exits_non_zero(
    project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (project / "schemas" / "bad.schema.json").write_text('{"type": 12}', encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["schemas", str(project)])

    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert "✗ bad.schema.json" in out
    assert "✓ content.schema.json" in out
    assert "Schema validation failed!" in out


def test_all_json_runs_every_check(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["all", str(project), "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert list(payload) == ["types", "refs", "schemas", "examples", "coverage"]
    assert payload["schemas"] == [
        {"name": "content.schema.json", "ok": True, "dependencies": [], "error": None}
    ]
    assert payload["examples"] == []
    assert [ref["target"] for ref in payload["refs"]["broken"]] == ["missing.md"]


def test_missing_project_path_exits(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["types", str(tmp_path / "missing")])

    assert excinfo.value.code == 1
    assert "Project path not found" in capsys.readouterr().err


def test_invalid_config_exits(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / ".specaudit.yml").write_text("- not\n- a mapping\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["refs", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "specaudit refs failed" in capsys.readouterr().err


def test_log_file_captures_debug_output(
    project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    log_file = tmp_path / "run.log"

    main(["types", str(project), "--json", "--log-file", str(log_file)])

    assert json.loads(capsys.readouterr().out)["synced"] == ["paragraph"]
    content = log_file.read_text(encoding="utf-8")
    assert "INFO specaudit.engine: Checking spec-schema synchronization" in content
    assert "DEBUG specaudit.engine: Found 1 spec files and 1 schema files" in content


def test_json_output_keeps_info_logs_off_the_console(
    project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main(["types", str(project), "--json"])

    assert "Checking spec-schema synchronization" not in capsys.readouterr().err
