"""Application result – aggregation results keyed by aggregation name."""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from mp_search.application.result.iterator import ResultIterator


@dataclasses.dataclass(frozen=True)
class AggregationResult:
    name: str
    fields: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    def get(self, field: str, default: Any = None) -> Any:
        return self.fields.get(field, default)

    @property
    def buckets(self) -> list[dict[str, Any]]:
        return list(self.fields.get("buckets", []))

    @property
    def value(self) -> Any:
        return self.fields.get("value")

    def to_dict(self) -> dict[str, Any]:
        return {self.name: dict(self.fields)}


class AggregationResultSet:
    """Named results of one aggregation response plus the documents it returned."""

    def __init__(
        self,
        results: Mapping[str, AggregationResult] | None = None,
        documents: ResultIterator[Any] | None = None,
    ) -> None:
        self._results = MappingProxyType(dict(results or {}))
        self._documents = documents

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any] | None) -> AggregationResultSet:
        """Build from the ``aggregations`` map of a search response."""
        return cls({name: AggregationResult(name, fields) for name, fields in (raw or {}).items()})

    @property
    def results(self) -> Mapping[str, AggregationResult]:
        return self._results

    def result(self, name: str) -> AggregationResult | None:
        return self._results.get(name)

    @property
    def documents(self) -> ResultIterator[Any] | None:
        return self._documents

    def with_documents(self, documents: ResultIterator[Any]) -> AggregationResultSet:
        self._documents = documents
        return self

    def __len__(self) -> int:
        return len(self._results)

    def __contains__(self, name: object) -> bool:
        return name in self._results


__all__ = ["AggregationResult", "AggregationResultSet"]
