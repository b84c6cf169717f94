"""Noise filter for type names that match the declaration pattern but are not block types."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Pattern, Sequence, Tuple

# JSON examples in the prose corpus reuse the `"type": "..."` shape for many
# enumerations. Each category below lists values that are never block types.
_EXACT_EXCLUSIONS: Dict[str, Tuple[str, ...]] = {
    "presentation": (
        "paginated",
        "continuous",
        "responsive",
        "portrait",
        "landscape",
        "single-column",
        "multi-column",
    ),
    "syntax-highlighting": (
        "keyword",
        "string",
        "number",
        "operator",
        "punctuation",
        "function",
        "variable",
        "constant",
        "builtin",
        "property",
        "tag",
        "attribute",
        "class-name",
        "regex",
        "identifier",
        "literal",
    ),
    "lifecycle-state": (
        "draft",
        "review",
        "frozen",
        "published",
        "archived",
        "final",
        "deprecated",
    ),
    "change-operation": (
        "insert",
        "delete",
        "replace",
        "move",
        "format",
        "modify",
    ),
    "form-field": (
        "textarea",
        "checkbox",
        "radio",
        "select",
        "dropdown",
        "date",
        "datetime",
        "email",
        "password",
        "tel",
        "url",
    ),
    "bibliographic": (
        "article",
        "article-journal",
        "article-magazine",
        "article-newspaper",
        "book",
        "chapter",
        "paper-conference",
        "report",
        "thesis",
        "webpage",
        "dataset",
        "software",
        "manuscript",
        "patent",
        "legal_case",
        "legislation",
        "entry-encyclopedia",
        "entry-dictionary",
        "motion_picture",
        "broadcast",
    ),
    "schema-kind": (
        "object",
        "array",
        "string",
        "number",
        "integer",
        "boolean",
        "null",
    ),
    "provenance": (
        "hash",
        "merkle-proof",
        "timestamp",
        "attestation",
        "derivation",
        "witness",
    ),
    "layout-arrangement": (
        "flex",
        "grid",
        "stack",
        "absolute",
        "float",
    ),
    "citation-format": (
        "apa",
        "mla",
        "chicago",
        "ieee",
        "harvard",
        "vancouver",
        "author-date",
        "numeric",
        "note",
    ),
    "inline-styling": (
        "bold",
        "italic",
        "underline",
        "strikethrough",
        "superscript",
        "subscript",
        "smallcaps",
        "uppercase",
        "lowercase",
        "capitalize",
    ),
    "relationship": (
        "required",
        "optional",
        "recommended",
        "supersedes",
        "references",
        "cites",
        "extends",
        "depends-on",
        "conflicts",
        "related",
    ),
}

_PATTERN_EXCLUSIONS: Dict[str, Tuple[str, ...]] = {
    "mime-type": (r"(?:image|font|application|text|audio|video)/.+",),
}


@dataclass(frozen=True)
class ExclusionRule:
    """A single excluded name, matched exactly or as a full-match regular expression."""

    pattern: str
    regex: bool = False
    category: str = "custom"

    def compile(self) -> Optional[Pattern[str]]:
        return re.compile(self.pattern) if self.regex else None


def _default_rules() -> Tuple[ExclusionRule, ...]:
    rules: List[ExclusionRule] = []
    for category, patterns in _PATTERN_EXCLUSIONS.items():
        rules.extend(ExclusionRule(pattern, regex=True, category=category) for pattern in patterns)
    for category, names in _EXACT_EXCLUSIONS.items():
        rules.extend(ExclusionRule(name, category=category) for name in names)
    return tuple(rules)


DEFAULT_EXCLUSIONS: Tuple[ExclusionRule, ...] = _default_rules()


class ExclusionFilter:
    """Decides whether a candidate type name is noise.

    Rules never match substrings: an exact rule compares the whole name and a
    regex rule must match the whole name. Names listed in ``keep`` are never
    excluded, which lets a project reclaim a token such as ``keyword`` when its
    format defines a block of that name.
    """

    def __init__(
        self,
        rules: Sequence[ExclusionRule] = DEFAULT_EXCLUSIONS,
        *,
        keep: Iterable[str] = (),
    ) -> None:
        self._exact: Dict[str, str] = {}
        self._patterns: List[Tuple[Pattern[str], str]] = []
        for rule in rules:
            compiled = rule.compile()
            if compiled is None:
                self._exact.setdefault(rule.pattern, rule.category)
            else:
                self._patterns.append((compiled, rule.category))
        self._keep = frozenset(keep)

    def category_of(self, name: str) -> Optional[str]:
        """Return the category of the first rule that excludes ``name``."""
        if name in self._keep:
            return None
        category = self._exact.get(name)
        if category is not None:
            return category
        for pattern, pattern_category in self._patterns:
            if pattern.fullmatch(name):
                return pattern_category
        return None

    def excludes(self, name: str) -> bool:
        return self.category_of(name) is not None


def build_exclusion_filter(
    *,
    extra_names: Iterable[str] = (),
    extra_patterns: Iterable[str] = (),
    keep: Iterable[str] = (),
) -> ExclusionFilter:
    """Combine the default rule set with project-specific additions."""
    rules = list(DEFAULT_EXCLUSIONS)
    rules.extend(ExclusionRule(name) for name in extra_names)
    rules.extend(ExclusionRule(pattern, regex=True) for pattern in extra_patterns)
    return ExclusionFilter(rules, keep=keep)


__all__ = [
    "DEFAULT_EXCLUSIONS",
    "ExclusionFilter",
    "ExclusionRule",
    "build_exclusion_filter",
]
