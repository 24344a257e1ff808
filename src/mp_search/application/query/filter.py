"""Application query – Filter, one non-scoring clause per operator.

Each operator maps to exactly one clause shape::

    Filter("age", [3, 9], Operator.BETWEEN).to_dict()
    # {"range": {"age": {"gte": 3, "lte": 9}}}

    Filter("deleted_at", False, Operator.EXISTS).to_dict()
    # {"bool": {"must_not": [{"exists": {"field": "deleted_at"}}]}}
"""
from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field as dataclass_field
from typing import Any, ClassVar

from mp_search.application.query.base import FilterCriteria
from mp_search.application.query.geo import GeoDistance, GeoShape
from mp_search.application.query.operator import Operator
from mp_search.kernel.errors import (
    InvalidFilterValueError,
    UnhandledOperatorError,
    UnknownOperatorError,
)

ClauseBuilder = Callable[[str, Any, Operator, dict[str, Any]], dict[str, Any]]


# ---------------------------------------------------------------------------
# Clause shapes
# ---------------------------------------------------------------------------


def _value_clause(keyword: str, field: str, value: Any, options: dict[str, Any]) -> dict[str, Any]:
    if not options:
        return {keyword: {field: value}}
    return {keyword: {field: {**options, "value": value}}}


def _term(field: str, value: Any, operator: Operator, options: dict[str, Any]) -> dict[str, Any]:
    return _value_clause("term", field, value, options)


def _regexp(field: str, value: Any, operator: Operator, options: dict[str, Any]) -> dict[str, Any]:
    return _value_clause("regexp", field, value, options)


def _terms(field: str, value: Any, operator: Operator, options: dict[str, Any]) -> dict[str, Any]:
    return {"terms": {**options, field: list(value)}}


def _prefix(field: str, value: Any, operator: Operator, options: dict[str, Any]) -> dict[str, Any]:
    return {"prefix": {**options, field: value}}


def _range(field: str, value: Any, operator: Operator, options: dict[str, Any]) -> dict[str, Any]:
    if operator is Operator.BETWEEN:
        lower, upper = value
        bounds = {"gte": lower, "lte": upper}
    else:
        bounds = {operator.value: value}
    return {"range": {field: {**options, **bounds}}}


def _exists(field: str, value: Any, operator: Operator, options: dict[str, Any]) -> dict[str, Any]:
    clause = {"exists": {"field": field}}
    if value:
        return clause
    return {"bool": {"must_not": [clause]}}


def _geo_distance(field: str, value: Any, operator: Operator, options: dict[str, Any]) -> dict[str, Any]:
    return {"geo_distance": {**options, "distance": value.distance, field: value.location}}


def _geo_shape(field: str, value: Any, operator: Operator, options: dict[str, Any]) -> dict[str, Any]:
    return {"geo_shape": {field: {**options, "shape": value.to_dict()}}}


# ---------------------------------------------------------------------------
# Value checks applied at construction
# ---------------------------------------------------------------------------


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


_VALUE_CHECKS: dict[Operator, tuple[Callable[[Any], bool], str]] = {
    Operator.TERMS: (_is_sequence, "requires a list of values"),
    Operator.BETWEEN: (
        lambda value: _is_sequence(value) and len(value) == 2,
        "requires exactly two bounds",
    ),
    Operator.EXISTS: (lambda value: isinstance(value, bool), "requires a boolean value"),
    Operator.GEO_DISTANCE: (
        lambda value: isinstance(value, GeoDistance),
        "requires a value with a location and a distance",
    ),
    Operator.GEO_SHAPE: (
        lambda value: isinstance(value, GeoShape),
        "requires a value serialisable to a shape",
    ),
}


@dataclass
class Filter(FilterCriteria):
    """Non-scoring clause on a single field.

    ``operator=None`` means term equality.  An operator outside
    :class:`Operator` is rejected here, before anything is serialised.
    """

    field: str
    value: Any
    operator: Operator | str | None = None
    options: dict[str, Any] = dataclass_field(default_factory=dict)

    clause_builders: ClassVar[Mapping[Operator, ClauseBuilder]] = {
        Operator.TERM: _term,
        Operator.TERMS: _terms,
        Operator.PREFIX: _prefix,
        Operator.REGEXP: _regexp,
        Operator.LESS_THAN: _range,
        Operator.GREATER_THAN: _range,
        Operator.LESS_THAN_OR_EQUALS: _range,
        Operator.GREATER_THAN_OR_EQUALS: _range,
        Operator.BETWEEN: _range,
        Operator.EXISTS: _exists,
        Operator.GEO_DISTANCE: _geo_distance,
        Operator.GEO_SHAPE: _geo_shape,
    }

    def __post_init__(self) -> None:
        if self.operator is None:
            self.operator = Operator.TERM
        if not Operator.has(self.operator):
            raise UnknownOperatorError(self.operator)
        self.operator = Operator(self.operator)
        self.options = dict(self.options or {})

        check = _VALUE_CHECKS.get(self.operator)
        if check is not None and not check[0](self.value):
            reason = check[1]
            raise InvalidFilterValueError(
                f'Operator "{self.operator}" {reason}, got {self.value!r}',
                detail={"field": self.field, "operator": self.operator.value},
            )

    @classmethod
    def create(
        cls,
        field: str,
        value: Any,
        operator: Operator | str | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Filter:
        return cls(field, value, operator, dict(options or {}))

    def to_dict(self) -> dict[str, Any]:
        builder = self.clause_builders.get(Operator(self.operator))
        if builder is None:
            raise UnhandledOperatorError(self.operator)
        return builder(self.field, self.value, Operator(self.operator), dict(self.options))


__all__ = ["Filter"]
