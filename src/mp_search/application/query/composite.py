"""Application query – composite aggregation cursor query.

:class:`CompositeAggregationQuery` is immutable: every ``with_*`` call
returns a new instance, so the repository can advance the ``after_key`` of a
traversal without touching the caller's query.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from mp_search.application.query.base import FilterCriteria
from mp_search.application.query.raw_query import RawQuery
from mp_search.kernel.errors import InvalidSearchArgumentError, MissingAggregationAttributesError

DEFAULT_COMPOSITE_SIZE = 100


def filter_null_and_empty(value: Any) -> Any:
    """Recursively drop ``None`` values and empty lists/dicts; ``False`` and ``0`` stay."""
    if isinstance(value, Mapping):
        cleaned: dict[str, Any] = {}
        for key, item in value.items():
            item = filter_null_and_empty(item)
            if not _is_blank(item):
                cleaned[key] = item
        return cleaned
    if isinstance(value, (list, tuple)):
        return [item for item in map(filter_null_and_empty, value) if not _is_blank(item)]
    return value


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, (dict, list)) and not value)


@dataclasses.dataclass(frozen=True)
class SourceProperty:
    """One ``terms`` source of a composite aggregation, keyed by *source*."""

    source: str
    property: str
    missing_bucket: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            self.source: {
                "terms": {"field": self.property, "missing_bucket": self.missing_bucket},
            }
        }


@dataclasses.dataclass(frozen=True)
class CompositeAggregationQuery:
    name: str | None = None
    filters: tuple[FilterCriteria, ...] = ()
    sources: tuple[SourceProperty, ...] = ()
    after_key: Mapping[str, Any] | None = None

    @classmethod
    def create(cls) -> CompositeAggregationQuery:
        return cls()

    def with_name(self, name: str) -> CompositeAggregationQuery:
        return dataclasses.replace(self, name=name)

    def with_filters(self, *filters: FilterCriteria) -> CompositeAggregationQuery:
        for item in filters:
            if not isinstance(item, FilterCriteria):
                raise InvalidSearchArgumentError(f"Can only append {FilterCriteria.__name__}")
        return dataclasses.replace(self, filters=tuple(filters))

    def with_sources(self, *sources: SourceProperty) -> CompositeAggregationQuery:
        for item in sources:
            if not isinstance(item, SourceProperty):
                raise InvalidSearchArgumentError(f"Can only append {SourceProperty.__name__}")
        return dataclasses.replace(self, sources=tuple(sources))

    def with_after_key(self, after_key: Mapping[str, Any] | None) -> CompositeAggregationQuery:
        return dataclasses.replace(self, after_key=dict(after_key) if after_key is not None else None)

    def get_name(self) -> str:
        if not self.name:
            raise MissingAggregationAttributesError("Aggregation name is missing")
        return self.name

    def to_dict(self, composite_size: int = DEFAULT_COMPOSITE_SIZE) -> dict[str, Any]:
        body = {
            "query": {"bool": {"must": [item.to_dict() for item in self.filters]}},
            "aggs": {
                self.get_name(): {
                    "composite": {
                        "size": composite_size,
                        "sources": [source.to_dict() for source in self.sources],
                        "after": self.after_key,
                    }
                }
            },
        }
        return filter_null_and_empty(body)

    def get_query(self, composite_size: int = DEFAULT_COMPOSITE_SIZE) -> RawQuery:
        return RawQuery(self.to_dict(composite_size))


__all__ = [
    "CompositeAggregationQuery",
    "DEFAULT_COMPOSITE_SIZE",
    "SourceProperty",
    "filter_null_and_empty",
]
