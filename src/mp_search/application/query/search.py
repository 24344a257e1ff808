"""Application query – Search, full-text criteria over one or more fields."""
from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field as dataclass_field
from typing import Any, ClassVar

from mp_search.application.query.base import SearchCriteria
from mp_search.kernel.errors import (
    InvalidSearchArgumentError,
    NoFieldsError,
    UnhandledFullTextSearchTypeError,
    UnknownFullTextSearchTypeError,
)
from mp_search.kernel.types import ConstantEnum

FieldSpec = str | Mapping[str, Mapping[str, Any] | None]
FieldEntry = tuple[str, dict[str, Any]]


class TextSearchType(ConstantEnum):
    QUERY_STRING = "query_string"
    MATCH = "match"
    MATCH_PHRASE = "match_phrase"
    MATCH_PHRASE_PREFIX = "match_phrase_prefix"
    PREFIX = "prefix"
    TERM = "term"


def normalize_fields(fields: Sequence[FieldSpec] | Mapping[str, Any]) -> list[FieldEntry]:
    """Flatten field specs into ``(name, options)`` pairs, keeping their order."""
    if isinstance(fields, str):
        return [(fields, {})]
    if isinstance(fields, Mapping):
        return [(name, dict(opts or {})) for name, opts in fields.items()]

    entries: list[FieldEntry] = []
    for spec in fields:
        if isinstance(spec, str):
            entries.append((spec, {}))
        elif isinstance(spec, Mapping):
            entries.extend((name, dict(opts or {})) for name, opts in spec.items())
        else:
            raise InvalidSearchArgumentError(f"Invalid field given: {spec!r}")
    return entries


def prepare_fields(entries: Sequence[FieldEntry]) -> list[str]:
    """Render field entries as backend field names.

    ``("title", {"boost": 2, "subfields": ["raw", ""]})`` renders as
    ``["title.raw^2", "title^2"]``.
    """
    prepared: list[str] = []
    for name, opts in entries:
        boost = opts.get("boost")
        suffix = f"^{boost}" if boost is not None else ""
        subfields = opts.get("subfields")
        if subfields:
            prepared.extend(f"{name}.{sub}{suffix}" if sub else f"{name}{suffix}" for sub in subfields)
        else:
            prepared.append(f"{name}{suffix}")
    return prepared


# ---------------------------------------------------------------------------
# Clause shapes
# ---------------------------------------------------------------------------


def _query_string(entries: list[FieldEntry], query: str, options: dict[str, Any]) -> dict[str, Any]:
    return {"query_string": {**options, "fields": prepare_fields(entries), "query": query}}


def _match(entries: list[FieldEntry], query: str, options: dict[str, Any]) -> dict[str, Any]:
    if len(entries) > 1:
        return {"multi_match": {**options, "fields": prepare_fields(entries), "query": query}}
    return {"match": {entries[0][0]: {**options, "query": query}}}


def _match_phrase(entries: list[FieldEntry], query: str, options: dict[str, Any]) -> dict[str, Any]:
    return {"match_phrase": {entries[0][0]: {**options, "query": query}}}


def _match_phrase_prefix(entries: list[FieldEntry], query: str, options: dict[str, Any]) -> dict[str, Any]:
    return {"match_phrase_prefix": {entries[0][0]: {**options, "query": query}}}


def _prefix(entries: list[FieldEntry], query: str, options: dict[str, Any]) -> dict[str, Any]:
    return {"prefix": {entries[0][0]: {**options, "value": query}}}


def _term(entries: list[FieldEntry], query: str, options: dict[str, Any]) -> dict[str, Any]:
    return {"term": {entries[0][0]: {**options, "value": query}}}


@dataclass
class Search(SearchCriteria):
    """Full-text criteria.

    ``fields`` is an ordered list of plain names or ``{name: {"boost": ...,
    "subfields": [...]}}`` entries, or a single mapping of such entries.
    Single-field types (phrase, phrase-prefix, prefix, term, and match with
    one field) only use the first field.
    """

    fields: Sequence[FieldSpec] | Mapping[str, Any]
    query_string: str
    type: TextSearchType | str = TextSearchType.QUERY_STRING
    options: dict[str, Any] = dataclass_field(default_factory=dict)

    shapes: ClassVar[Mapping[TextSearchType, Callable[[list[FieldEntry], str, dict[str, Any]], dict[str, Any]]]] = {
        TextSearchType.QUERY_STRING: _query_string,
        TextSearchType.MATCH: _match,
        TextSearchType.MATCH_PHRASE: _match_phrase,
        TextSearchType.MATCH_PHRASE_PREFIX: _match_phrase_prefix,
        TextSearchType.PREFIX: _prefix,
        TextSearchType.TERM: _term,
    }

    def __post_init__(self) -> None:
        if not self.fields:
            raise NoFieldsError()
        if not TextSearchType.has(self.type):
            raise UnknownFullTextSearchTypeError(self.type)
        self.type = TextSearchType(self.type)
        self.options = dict(self.options or {})
        self._entries = normalize_fields(self.fields)
        if not self._entries:
            raise NoFieldsError()

    @classmethod
    def create(
        cls,
        fields: Sequence[FieldSpec] | Mapping[str, Any],
        query_string: str,
        type: TextSearchType | str = TextSearchType.QUERY_STRING,
        options: Mapping[str, Any] | None = None,
    ) -> Search:
        return cls(fields, query_string, type, dict(options or {}))

    @property
    def field_names(self) -> list[str]:
        return [name for name, _ in self._entries]

    def to_dict(self) -> dict[str, Any]:
        shape = self.shapes.get(TextSearchType(self.type))
        if shape is None:
            raise UnhandledFullTextSearchTypeError(self.type)
        return shape(self._entries, self.query_string, dict(self.options))


__all__ = ["FieldSpec", "Search", "TextSearchType", "normalize_fields", "prepare_fields"]
