"""Application query – Query, the composer of criteria and aggregations.

Assembly of :meth:`Query.to_dict`, each step skipped when empty:

1. ``size``/``from``/``sort``/``_source``
2. searches, under ``bool.must`` or ``bool.should`` + ``minimum_should_match``
3. filters, combined into one must-bool under ``bool.filter``
4. options such as ``min_score``
5. aggregations under ``aggs``

A nested query (:meth:`Query.create_nested`) renders only its criteria,
wrapped as ``{"nested": {"path": ..., "query": ...}}``, and can be used as a
filter or search of a parent query.
"""
from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, Self

from mp_search.application.query.aggregation import Aggregation
from mp_search.application.query.base import BaseQuery, FilterCriteria, SearchCriteria
from mp_search.application.query.bool_query import BoolOperator, BoolQuery, Must
from mp_search.application.query.options import Optionable
from mp_search.kernel.errors import (
    InvalidSearchArgumentError,
    InvalidSearchOperatorError,
    UnknownChildArgumentTypeError,
)


class Query(BaseQuery, FilterCriteria, Optionable):
    MINIMUM_SHOULD_MATCH: ClassVar[int] = 1

    OPTION_MIN_SCORE: ClassVar[str] = "min_score"
    OPTION_PATH: ClassVar[str] = "path"
    OPTION_SCORE_MODE: ClassVar[str] = "score_mode"
    OPTION_IGNORE_UNMAPPED: ClassVar[str] = "ignore_unmapped"
    OPTION_INNER_HITS: ClassVar[str] = "inner_hits"

    def __init__(
        self,
        *children: Any,
        nested: bool = False,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__()
        self._nested = nested
        self._options: dict[str, Any] = {}
        self._searches: list[SearchCriteria | BoolQuery | Query] = []
        self._filters: list[FilterCriteria] = []
        self._aggregations: list[Aggregation] = []
        self._search_operator = BoolOperator.SHOULD

        for name, value in (options or {}).items():
            self.set_option(name, value)
        for index, child in enumerate(children):
            if child is None:
                continue
            self._add_child(child, index)

    @classmethod
    def create(cls, *children: Any) -> Self:
        return cls(*children)

    @classmethod
    def create_nested(
        cls,
        path: str,
        *children: Any,
        options: Mapping[str, Any] | None = None,
    ) -> Self:
        """Build a query embedded in a ``nested`` clause on *path*."""
        return cls(*children, nested=True, options={**(options or {}), cls.OPTION_PATH: path})

    def available_options(self) -> tuple[str, ...]:
        if self._nested:
            return (
                self.OPTION_PATH,
                self.OPTION_SCORE_MODE,
                self.OPTION_IGNORE_UNMAPPED,
                self.OPTION_INNER_HITS,
            )
        return (self.OPTION_MIN_SCORE,)

    # ------------------------------------------------------------------
    # Builder
    # ------------------------------------------------------------------

    def add(self, child: Any) -> Self:
        self._add_child(child, 0)
        return self

    def where(self, criteria: FilterCriteria) -> Self:
        return self.add(criteria)

    def search(self, criteria: SearchCriteria | BoolQuery | Query) -> Self:
        if not (
            isinstance(criteria, (SearchCriteria, BoolQuery))
            or (isinstance(criteria, Query) and criteria.nested)
        ):
            raise InvalidSearchArgumentError(
                "Argument search must be one of [Search, BoolQuery, nested Query]"
            )
        self._searches.append(criteria)
        return self

    def aggregate(self, aggregation: Aggregation) -> Self:
        return self.add(aggregation)

    def set_min_score(self, min_score: float) -> Self:
        return self.set_option(self.OPTION_MIN_SCORE, min_score)

    def set_search_operator(self, operator: BoolOperator | str) -> Self:
        if operator not in (BoolOperator.MUST, BoolOperator.SHOULD):
            raise InvalidSearchOperatorError(operator)
        self._search_operator = BoolOperator(operator)
        return self

    @property
    def min_score(self) -> float | None:
        return self._options.get(self.OPTION_MIN_SCORE)

    @property
    def search_operator(self) -> BoolOperator:
        return self._search_operator

    @property
    def nested(self) -> bool:
        return self._nested

    @property
    def filters(self) -> tuple[FilterCriteria, ...]:
        return tuple(self._filters)

    @property
    def searches(self) -> tuple[SearchCriteria | BoolQuery | Query, ...]:
        return tuple(self._searches)

    @property
    def aggregations(self) -> tuple[Aggregation, ...]:
        return tuple(self._aggregations)

    def _add_child(self, child: Any, index: int) -> None:
        if isinstance(child, Query) and not child.nested:
            raise UnknownChildArgumentTypeError(index)
        if isinstance(child, FilterCriteria):
            self._filters.append(child)
        elif isinstance(child, SearchCriteria):
            self._searches.append(child)
        elif isinstance(child, Aggregation):
            self._aggregations.append(child)
        else:
            raise UnknownChildArgumentTypeError(index)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        body = {} if self._nested else self._build_base_body()

        if self._searches:
            prepared = [criteria.to_dict() for criteria in self._searches]
            if self._search_operator is BoolOperator.MUST:
                body["query"] = {"bool": {"must": prepared}}
            else:
                body["query"] = {
                    "bool": {
                        "should": prepared,
                        "minimum_should_match": self.MINIMUM_SHOULD_MATCH,
                    }
                }

        if self._filters:
            query = body.setdefault("query", {})
            query.setdefault("bool", {})["filter"] = Must(*self._filters).to_dict()

        if self._nested:
            return {"nested": {**self.options, "query": body.get("query", {"match_all": {}})}}

        body.update(self.options)

        if self._aggregations:
            aggs: dict[str, Any] = {}
            for aggregation in self._aggregations:
                aggs.update(aggregation.to_dict())
            body["aggs"] = aggs

        return body

    def freeze(self) -> FrozenQuery:
        """Snapshot the current body; later builder calls do not affect it."""
        return FrozenQuery(self.to_dict())


@dataclass(frozen=True)
class FrozenQuery:
    """Immutable request body produced by :meth:`Query.freeze`."""

    body: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "body", MappingProxyType(copy.deepcopy(dict(self.body))))

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(dict(self.body))


__all__ = ["FrozenQuery", "Query"]
