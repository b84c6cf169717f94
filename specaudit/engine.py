"""Pipeline orchestration for type reconciliation and cross-reference checks."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from .config import SpecAuditConfig, load_config
from .corpus_scanner import CorpusScanner, relative_path
from .crossrefs import AnchorIndex, AnchorIndexBuilder, ReferenceExtractor, ReferenceResolver
from .logging import get_logger
from .models import FileDiagnostic, ReconciliationReport, StructuralType, ValidationReport
from .vocab import (
    ProseTypeExtractor,
    SchemaTypeExtractor,
    UnparsableSchemaError,
    build_exclusion_filter,
    reconcile,
)


@dataclass
class ProseDocument:
    """A prose file read into memory."""

    file: str
    text: str


class ConsistencyEngine:
    """Coordinates the vocabulary and cross-reference pipelines for one project root.

    Every check reads the corpus fresh, never writes, and returns an advisory
    report; whether findings fail a build is left to the caller.
    """

    def __init__(
        self,
        config: SpecAuditConfig,
        *,
        scanner: CorpusScanner | None = None,
        prose_extractor: ProseTypeExtractor | None = None,
        schema_extractor: SchemaTypeExtractor | None = None,
        anchor_builder: AnchorIndexBuilder | None = None,
        reference_extractor: ReferenceExtractor | None = None,
    ) -> None:
        self.config = config
        self.root = config.root
        self.scanner = scanner or CorpusScanner(config.corpus.exclude_paths)
        vocabulary = config.vocabulary
        self.prose_extractor = prose_extractor or ProseTypeExtractor(
            build_exclusion_filter(
                extra_names=vocabulary.extra_exclusions,
                extra_patterns=vocabulary.extra_exclusion_patterns,
                keep=vocabulary.keep,
            ),
            placeholder=vocabulary.placeholder,
        )
        self.schema_extractor = schema_extractor or SchemaTypeExtractor(
            placeholder=vocabulary.placeholder
        )
        self.anchor_builder = anchor_builder or AnchorIndexBuilder()
        self.reference_extractor = reference_extractor or ReferenceExtractor()
        self.logger = get_logger("engine")

    @classmethod
    def for_path(cls, path: str | Path) -> "ConsistencyEngine":
        """Build an engine from the ``.specaudit.yml`` found at ``path``."""
        project = Path(path).expanduser().resolve()
        if not project.exists():
            raise FileNotFoundError(f"Project path not found: {path}")
        if not project.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {path}")
        return cls(load_config(project))

    def prose_files(self) -> List[Path]:
        return self.scanner.scan(self.config.prose_root, self.config.corpus.prose_extensions)

    def schema_files(self) -> List[Path]:
        return self.scanner.scan(self.config.schema_root, [self.config.corpus.schema_suffix])

    def check_types(self) -> ReconciliationReport:
        """Reconcile the type vocabulary documented in prose with the schemas."""
        self.logger.info("Checking spec-schema synchronization")
        diagnostics: List[FileDiagnostic] = []

        documents, read_errors = self._read_prose()
        diagnostics.extend(read_errors)
        prose_types: List[StructuralType] = []
        for document in documents:
            prose_types.extend(self.prose_extractor.extract(document.text, document.file))

        schema_paths = self.schema_files()
        schema_types: List[StructuralType] = []
        for path in schema_paths:
            file = relative_path(path, self.root)
            try:
                text = path.read_text(encoding="utf-8")
                schema_types.extend(self.schema_extractor.extract_text(text, file))
            except UnparsableSchemaError as exc:
                self.logger.warning("%s", exc)
                diagnostics.append(FileDiagnostic(file=file, message=str(exc)))
            except (OSError, UnicodeDecodeError) as exc:
                self.logger.warning("Could not read %s: %s", file, exc)
                diagnostics.append(FileDiagnostic(file=file, message=f"Could not read {file}: {exc}"))

        self.logger.debug(
            "Found %d spec files and %d schema files", len(documents), len(schema_paths)
        )
        report = reconcile(prose_types, schema_types)
        report.prose_files = len(documents) + len(read_errors)
        report.schema_files = len(schema_paths)
        report.diagnostics = diagnostics
        return report

    def check_references(self) -> ValidationReport:
        """Resolve every cross-reference in the prose corpus."""
        self.logger.info("Validating cross-references")
        documents, diagnostics = self._read_prose()

        index = AnchorIndex()
        for document in documents:
            index.add(self.anchor_builder.extract(document.text, document.file))
        self.logger.debug("Indexed %d sections/anchors", len(index))

        references = []
        for document in documents:
            references.extend(self.reference_extractor.extract(document.text, document.file))
        self.logger.debug("Found %d cross-references", len(references))

        corpus_files = [document.file for document in documents]
        corpus_files.extend(diagnostic.file for diagnostic in diagnostics)
        resolver = ReferenceResolver(
            self.root,
            index,
            corpus_files,
            prose_extensions=self.config.corpus.prose_extensions,
        )
        valid, broken = resolver.resolve(references)
        return ValidationReport(
            headings=list(index),
            references=references,
            valid=valid,
            broken=broken,
            prose_files=len(corpus_files),
            diagnostics=diagnostics,
        )

    def _read_prose(self) -> Tuple[List[ProseDocument], List[FileDiagnostic]]:
        documents: List[ProseDocument] = []
        diagnostics: List[FileDiagnostic] = []
        for path in self.prose_files():
            file = relative_path(path, self.root)
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                self.logger.warning("Could not read %s: %s", file, exc)
                diagnostics.append(FileDiagnostic(file=file, message=f"Could not read {file}: {exc}"))
                continue
            documents.append(ProseDocument(file=file, text=text))
        return documents, diagnostics


__all__ = ["ConsistencyEngine", "ProseDocument"]
