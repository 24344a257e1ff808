"""Application query – Aggregation, a named bucket/metric/global descriptor.

Nested aggregations are merged under the parent's ``aggs`` key::

    Aggregation("country", Bucket.TERMS, "by_country").nest(
        Aggregation("salary", Metric.AVG, "avg_salary"),
    ).to_dict()
    # {"by_country": {"terms": {"field": "country"},
    #                 "aggs": {"avg_salary": {"avg": {"field": "salary"}}}}}
"""
from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any, Self

from mp_search.kernel.errors import UnknownAggregationTypeError
from mp_search.kernel.types import ConstantEnum

GLOBAL = "global"


class Bucket(ConstantEnum):
    TERMS = "terms"
    FILTERS = "filters"
    HISTOGRAM = "histogram"
    DATE_HISTOGRAM = "date_histogram"


class Metric(ConstantEnum):
    AVG = "avg"
    CARDINALITY = "cardinality"
    EXTENDED_STATS = "extended_stats"
    GEO_BOUNDS = "geo_bounds"
    GEO_CENTROID = "geo_centroid"
    MAX = "max"
    MIN = "min"
    PERCENTILES = "percentiles"
    STATS = "stats"
    SUM = "sum"
    VALUE_COUNT = "value_count"
    RANGE = "range"
    TOP_HITS = "top_hits"


def is_known_type(aggregation_type: Any) -> bool:
    return aggregation_type == GLOBAL or Bucket.has(aggregation_type) or Metric.has(aggregation_type)


class Aggregation:
    """Bucket, metric or global aggregation.

    When *name* is empty a random identifier is generated once, at
    construction, so the name stays the same for every serialisation of this
    instance.  Pass an explicit name whenever results are looked up by name.
    """

    def __init__(
        self,
        field: str | None,
        type: Bucket | Metric | str,
        name: str = "",
        options: Mapping[str, Any] | None = None,
    ) -> None:
        if not is_known_type(type):
            raise UnknownAggregationTypeError(type)
        self.field = field
        self.type = str(type)
        self.name = name or f"agg_{uuid.uuid4().hex}"
        self.options: dict[str, Any] = dict(options or {})
        self._nested: list[Aggregation] = []

    @classmethod
    def create(
        cls,
        field: str | None,
        type: Bucket | Metric | str,
        name: str = "",
        options: Mapping[str, Any] | None = None,
    ) -> Self:
        return cls(field, type, name, options)

    @classmethod
    def create_global(cls, name: str = "", options: Mapping[str, Any] | None = None) -> Self:
        return cls(None, GLOBAL, name, options)

    def nest(self, *aggregations: Aggregation) -> Self:
        self._nested.extend(aggregations)
        return self

    @property
    def nested(self) -> tuple[Aggregation, ...]:
        return tuple(self._nested)

    def to_dict(self) -> dict[str, Any]:
        if self.type == GLOBAL:
            body: dict[str, Any] = {GLOBAL: {}, **self.options}
        else:
            inner: dict[str, Any] = {"field": self.field} if self.field else {}
            inner.update(self.options)
            body = {self.type: inner}

        if self._nested:
            aggs: dict[str, Any] = {}
            for aggregation in self._nested:
                aggs.update(aggregation.to_dict())
            body["aggs"] = aggs

        return {self.name: body}

    def __repr__(self) -> str:
        return f"Aggregation(name={self.name!r}, type={self.type!r}, field={self.field!r})"


__all__ = ["Aggregation", "Bucket", "GLOBAL", "Metric", "is_known_type"]
