"""Application query – boolean combinators (must / should / must_not)."""
from __future__ import annotations

from typing import Any, ClassVar, Self

from mp_search.application.query.base import Criteria, FilterCriteria
from mp_search.kernel.errors import NoOperatorDefinedError, UnknownChildArgumentTypeError
from mp_search.kernel.types import ConstantEnum


class BoolOperator(ConstantEnum):
    MUST = "must"
    SHOULD = "should"
    MUST_NOT = "must_not"


class BoolQuery(FilterCriteria):
    """Combine criteria under one ``bool`` operator.

    Concrete subclasses fix :attr:`operator`; the base class has none and
    fails with :class:`NoOperatorDefinedError` once the operator is needed.
    Falsy children such as ``None`` are dropped.
    """

    operator: ClassVar[BoolOperator | None] = None

    def __init__(self, *children: Criteria | None) -> None:
        self._children: list[Criteria] = []
        for index, child in enumerate(children):
            if not child:
                continue
            self._append(child, index)

    @classmethod
    def create(cls, *children: Criteria | None) -> Self:
        return cls(*children)

    def add(self, child: Criteria) -> Self:
        self._append(child, len(self._children))
        return self

    @property
    def children(self) -> tuple[Criteria, ...]:
        return tuple(self._children)

    def get_operator(self) -> BoolOperator:
        if self.operator is None:
            raise NoOperatorDefinedError()
        return self.operator

    def to_dict(self) -> dict[str, Any]:
        return {"bool": {self.get_operator().value: [child.to_dict() for child in self._children]}}

    def _append(self, child: Any, index: int) -> None:
        if not isinstance(child, Criteria):
            raise UnknownChildArgumentTypeError(index)
        self._children.append(child)


class Must(BoolQuery):
    operator = BoolOperator.MUST


class Should(BoolQuery):
    operator = BoolOperator.SHOULD


class MustNot(BoolQuery):
    operator = BoolOperator.MUST_NOT


__all__ = ["BoolOperator", "BoolQuery", "Must", "MustNot", "Should"]
