"""CLI entrypoints for specaudit commands."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Callable, Dict, List, Tuple

from .config import ConfigError, SpecAuditConfig
from .engine import ConsistencyEngine
from .logging import configure_logging
from .reporting import (
    references_to_dict,
    render_coverage,
    render_examples,
    render_references,
    render_schema_checks,
    render_types,
    types_to_dict,
)
from .schemas import CoverageReporter, ExampleValidator, SchemaCatalog

# Each runner returns (text output, JSON payload, advisory findings, hard failures).
_Outcome = Tuple[str, object, bool, bool]


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    _add_verbose_option(parser, suppress_default=True)
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the report as JSON instead of text.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when the report contains findings.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="specaudit",
        description="Check a format specification's prose and JSON schemas for drift.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    commands = {
        "types": "Compare block types documented in prose with those defined in schemas.",
        "refs": "Validate links, anchors and section citations across prose documents.",
        "schemas": "Check that every JSON schema is valid against its meta-schema.",
        "examples": "Validate example documents against their schemas.",
        "coverage": "Report which extensions and schemas have example documents.",
        "all": "Run every check in sequence.",
    }
    for name, help_text in commands.items():
        _add_common_options(subparsers.add_parser(name, help=help_text))

    return parser


def _run_types(engine: ConsistencyEngine) -> _Outcome:
    report = engine.check_types()
    return render_types(report), types_to_dict(report), report.has_discrepancies, False


def _run_refs(engine: ConsistencyEngine) -> _Outcome:
    report = engine.check_references()
    return render_references(report), references_to_dict(report), bool(report.broken), False


def _catalog(config: SpecAuditConfig) -> SchemaCatalog:
    return SchemaCatalog(
        config.schema_root,
        dependencies=config.schemas.dependencies,
        suffix=config.corpus.schema_suffix,
    )


def _run_schemas(engine: ConsistencyEngine) -> _Outcome:
    results = _catalog(engine.config).check_all()
    failed = any(not result.ok for result in results)
    return render_schema_checks(results), [asdict(result) for result in results], failed, failed


def _run_examples(engine: ConsistencyEngine) -> _Outcome:
    validator = ExampleValidator(
        _catalog(engine.config),
        engine.config.examples_root,
        engine.config.schemas.examples,
    )
    results = validator.validate_all()
    failed = any(result.failed for result in results)
    return render_examples(results), [asdict(result) for result in results], failed, failed


def _run_coverage(engine: ConsistencyEngine) -> _Outcome:
    reporter = CoverageReporter.from_config(engine.config, _catalog(engine.config).names())
    report = reporter.report()
    return render_coverage(report), asdict(report), report.has_gaps, False


_RUNNERS: Dict[str, Callable[[ConsistencyEngine], _Outcome]] = {
    "types": _run_types,
    "refs": _run_refs,
    "schemas": _run_schemas,
    "examples": _run_examples,
    "coverage": _run_coverage,
}


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for specaudit commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=args.json, log_file=args.log_file)

    try:
        engine = ConsistencyEngine.for_path(args.path)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except ConfigError as exc:
        parser.exit(1, f"specaudit {args.command} failed: {exc}\n")

    names: List[str] = list(_RUNNERS) if args.command == "all" else [args.command]
    payload: Dict[str, object] = {}
    findings = False
    failures = False
    for name in names:
        text, data, found, failed = _RUNNERS[name](engine)
        findings = findings or found
        failures = failures or failed
        if args.json:
            payload[name] = data
        else:
            sys.stdout.write(text)
            if len(names) > 1:
                sys.stdout.write("\n")

    if args.json:
        output = payload if len(names) > 1 else payload[names[0]]
        print(json.dumps(output, indent=2, ensure_ascii=False))

    if failures or (args.strict and findings):
        sys.exit(1)


if __name__ == "__main__":
    main(sys.argv[1:])
