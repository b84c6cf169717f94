"""Configuration loading for specaudit (.specaudit.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".specaudit.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


_DEFAULT_DEPENDENCIES: Dict[str, List[str]] = {
    "annotations.schema.json": ["anchor.schema.json"],
    "collaboration.schema.json": ["anchor.schema.json"],
    "content.schema.json": [
        "semantic.schema.json",
        "academic.schema.json",
        "presentation.schema.json",
        "legal.schema.json",
    ],
    "phantoms.schema.json": ["anchor.schema.json"],
    "security.schema.json": ["anchor.schema.json"],
}

_DEFAULT_COVERAGE: Dict[str, List[str]] = {
    "manifest.schema.json": ["manifest.json"],
    "content.schema.json": ["content/document.json"],
    "dublin-core.schema.json": ["metadata/dublin-core.json"],
    "collaboration.schema.json": ["collaboration/comments.json", "collaboration/changes.json"],
    "forms.schema.json": ["forms/data.json"],
    "phantoms.schema.json": ["phantoms/clusters.json"],
    "security.schema.json": ["security/signatures.json", "security/annotations.json"],
    "provenance.schema.json": ["provenance/lineage.json"],
    "asset-index.schema.json": ["assets/index.json"],
    "precise-layout.schema.json": [
        "presentation/layouts/letter.json",
        "presentation/layouts/a4.json",
    ],
    "presentation.schema.json": [
        "presentation/paginated.json",
        "presentation/continuous.json",
        "presentation/responsive.json",
    ],
    "academic.schema.json": ["academic/numbering.json"],
    "semantic.schema.json": ["semantic/bibliography.json"],
    "annotations.schema.json": ["security/annotations.json"],
}

_DEFAULT_EXTENSION_SCHEMAS = [
    "academic",
    "collaboration",
    "forms",
    "legal",
    "phantoms",
    "presentation",
    "security",
    "semantic",
]


@dataclass(frozen=True)
class ExampleValidation:
    """Example file checked against a schema in every example directory."""

    schema: str
    file: str
    required: bool = False


def _default_example_validations() -> List[ExampleValidation]:
    return [
        ExampleValidation("manifest.schema.json", "manifest.json", required=True),
        ExampleValidation("content.schema.json", "content/document.json", required=True),
        ExampleValidation("dublin-core.schema.json", "metadata/dublin-core.json", required=True),
        ExampleValidation("collaboration.schema.json", "collaboration/comments.json"),
        ExampleValidation("collaboration.schema.json", "collaboration/changes.json"),
        ExampleValidation("forms.schema.json", "forms/data.json"),
        ExampleValidation("phantoms.schema.json", "phantoms/clusters.json"),
    ]


@dataclass
class CorpusConfig:
    """Where the prose, schema and example corpora live."""

    prose_dir: str = "spec"
    schema_dir: str = "schemas"
    examples_dir: str = "examples"
    extensions_dir: str = "spec/extensions"
    prose_extensions: List[str] = field(default_factory=lambda: [".md"])
    schema_suffix: str = ".schema.json"
    exclude_paths: List[str] = field(default_factory=list)


@dataclass
class VocabularyConfig:
    """Type vocabulary extraction settings."""

    placeholder: str = "text"
    extra_exclusions: List[str] = field(default_factory=list)
    extra_exclusion_patterns: List[str] = field(default_factory=list)
    keep: List[str] = field(default_factory=list)


@dataclass
class SchemaConfig:
    """Schema dependency, example and coverage maps."""

    dependencies: Dict[str, List[str]] = field(
        default_factory=lambda: {key: list(value) for key, value in _DEFAULT_DEPENDENCIES.items()}
    )
    shared: List[str] = field(default_factory=lambda: ["anchor.schema.json"])
    examples: List[ExampleValidation] = field(default_factory=_default_example_validations)
    coverage: Dict[str, List[str]] = field(
        default_factory=lambda: {key: list(value) for key, value in _DEFAULT_COVERAGE.items()}
    )
    extension_schemas: List[str] = field(default_factory=lambda: list(_DEFAULT_EXTENSION_SCHEMAS))
    extension_prefix: str = "codex."


@dataclass
class SpecAuditConfig:
    """Represents the settings defined in .specaudit.yml."""

    root: Path
    corpus: CorpusConfig = field(default_factory=CorpusConfig)
    vocabulary: VocabularyConfig = field(default_factory=VocabularyConfig)
    schemas: SchemaConfig = field(default_factory=SchemaConfig)

    @property
    def prose_root(self) -> Path:
        return self.root / self.corpus.prose_dir

    @property
    def schema_root(self) -> Path:
        return self.root / self.corpus.schema_dir

    @property
    def examples_root(self) -> Path:
        return self.root / self.corpus.examples_dir

    @property
    def extensions_root(self) -> Path:
        return self.root / self.corpus.extensions_dir


def load_config(config_path: Path) -> SpecAuditConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SpecAuditConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    corpus = CorpusConfig()
    corpus_data = _as_dict(data.get("corpus"))
    if corpus_data:
        corpus.prose_dir = _as_str(corpus_data.get("prose_dir")) or corpus.prose_dir
        corpus.schema_dir = _as_str(corpus_data.get("schema_dir")) or corpus.schema_dir
        corpus.examples_dir = _as_str(corpus_data.get("examples_dir")) or corpus.examples_dir
        corpus.extensions_dir = _as_str(corpus_data.get("extensions_dir")) or corpus.extensions_dir
        corpus.prose_extensions = (
            _as_str_list(corpus_data.get("prose_extensions")) or corpus.prose_extensions
        )
        corpus.schema_suffix = _as_str(corpus_data.get("schema_suffix")) or corpus.schema_suffix
        corpus.exclude_paths = _as_str_list(corpus_data.get("exclude_paths"))

    vocabulary = VocabularyConfig()
    vocabulary_data = _as_dict(data.get("vocabulary"))
    if vocabulary_data:
        vocabulary.placeholder = (
            _as_str(vocabulary_data.get("placeholder")) or vocabulary.placeholder
        )
        vocabulary.extra_exclusions = _as_str_list(vocabulary_data.get("extra_exclusions"))
        vocabulary.extra_exclusion_patterns = _as_str_list(
            vocabulary_data.get("extra_exclusion_patterns")
        )
        vocabulary.keep = _as_str_list(vocabulary_data.get("keep"))

    schemas = SchemaConfig()
    schema_data = _as_dict(data.get("schemas"))
    if schema_data:
        if "dependencies" in schema_data:
            schemas.dependencies = _as_list_map(schema_data.get("dependencies"))
        if "shared" in schema_data:
            schemas.shared = _as_str_list(schema_data.get("shared"))
        if "examples" in schema_data:
            schemas.examples = _as_validations(schema_data.get("examples"))
        if "coverage" in schema_data:
            schemas.coverage = _as_list_map(schema_data.get("coverage"))
        if "extension_schemas" in schema_data:
            schemas.extension_schemas = _as_str_list(schema_data.get("extension_schemas"))
        prefix = schema_data.get("extension_prefix")
        if isinstance(prefix, str):
            schemas.extension_prefix = prefix

    return SpecAuditConfig(root=root, corpus=corpus, vocabulary=vocabulary, schemas=schemas)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


def _as_list_map(value: Any) -> Dict[str, List[str]]:
    if not isinstance(value, dict):
        raise ConfigError("Expected a mapping of names to lists")
    return {str(key): _as_str_list(item) for key, item in value.items()}


def _as_validations(value: Any) -> List[ExampleValidation]:
    if not isinstance(value, list):
        raise ConfigError("schemas.examples must be a list of {schema, file} mappings")
    validations: List[ExampleValidation] = []
    for entry in value:
        entry_data = _as_dict(entry)
        schema = _as_str(entry_data.get("schema"))
        file = _as_str(entry_data.get("file"))
        if not schema or not file:
            raise ConfigError("Each schemas.examples entry needs 'schema' and 'file'")
        validations.append(
            ExampleValidation(
                schema=schema,
                file=file,
                required=_as_bool(entry_data.get("required")) or False,
            )
        )
    return validations


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "CorpusConfig",
    "ExampleValidation",
    "SchemaConfig",
    "SpecAuditConfig",
    "VocabularyConfig",
    "load_config",
]
