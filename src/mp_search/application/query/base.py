"""Application query – criteria markers, sort order and the paginated query base."""
from __future__ import annotations

import abc
from collections.abc import Mapping
from typing import Any, Protocol, Self, runtime_checkable

from mp_search.kernel.errors import InvalidSortDirectionError
from mp_search.kernel.types import ConstantEnum


class SortOrder(ConstantEnum):
    ASC = "asc"
    DESC = "desc"


class Criteria(abc.ABC):
    """Any node that serialises into a fragment of the backend query grammar."""

    @abc.abstractmethod
    def to_dict(self) -> dict[str, Any]: ...


class FilterCriteria(Criteria):
    """Marker: non-scoring criteria placed in the ``filter`` slot of a query."""


class SearchCriteria(Criteria):
    """Marker: scoring full-text criteria placed in the ``must``/``should`` slot."""


@runtime_checkable
class QueryLike(Protocol):
    """Anything a repository can dispatch as a request body."""

    def to_dict(self) -> dict[str, Any]: ...


class BaseQuery(abc.ABC):
    """Selection, sorting and pagination shared by every top-level query."""

    def __init__(self) -> None:
        self._select: list[str] | None = None
        self._limit: int | None = None
        self._offset: int | None = None
        self._sort: dict[str, dict[str, Any]] = {}

    def select(self, fields: list[str]) -> Self:
        """Restrict the returned ``_source`` to *fields*; an empty list suppresses it."""
        self._select = list(fields)
        return self

    def sort(
        self,
        field: str | Mapping[str, Mapping[str, Any]],
        order: SortOrder | str = SortOrder.ASC,
        options: Mapping[str, Any] | None = None,
    ) -> Self:
        """Sort by *field*, or by every ``{field: {"order", "options"}}`` entry of a mapping."""
        if isinstance(field, Mapping):
            for name, spec in field.items():
                self.sort(name, spec.get("order", SortOrder.ASC), spec.get("options"))
            return self

        if not SortOrder.has(order):
            raise InvalidSortDirectionError(order)
        self._sort[field] = {"order": SortOrder(order).value, **(options or {})}
        return self

    def limit(self, size: int) -> Self:
        self._limit = size
        return self

    def skip(self, offset: int) -> Self:
        self._offset = offset
        return self

    @property
    def selected_fields(self) -> list[str] | None:
        return self._select

    @property
    def size(self) -> int | None:
        return self._limit

    @property
    def offset(self) -> int | None:
        return self._offset

    @property
    def sorting(self) -> dict[str, dict[str, Any]]:
        return self._sort

    def _build_base_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self._limit is not None:
            body["size"] = self._limit
        if self._offset is not None:
            body["from"] = self._offset
        if self._sort:
            body["sort"] = {field: dict(spec) for field, spec in self._sort.items()}
        if self._select is not None:
            body["_source"] = list(dict.fromkeys(self._select)) if self._select else False
        return body

    @abc.abstractmethod
    def to_dict(self) -> dict[str, Any]: ...


__all__ = [
    "BaseQuery",
    "Criteria",
    "FilterCriteria",
    "QueryLike",
    "SearchCriteria",
    "SortOrder",
]
