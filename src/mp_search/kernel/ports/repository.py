"""Repository port – narrow contract for document-search repositories."""

from __future__ import annotations

import abc
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from mp_search.application.query.base import QueryLike
    from mp_search.application.query.composite import CompositeAggregationQuery
    from mp_search.application.result import (
        AggregationResultSet,
        CompositeResult,
        ResultIterator,
    )

TEntity = TypeVar("TEntity")


class SearchRepository(abc.ABC, Generic[TEntity]):
    """Port: read/write access to one logical index of a search backend.

    Concrete implementations live in ``adapters/elasticsearch`` and
    ``adapters/opensearch``.
    """

    # -- writes ---------------------------------------------------------

    @abc.abstractmethod
    def save(self, document_id: str, entity: TEntity | Mapping[str, Any]) -> None: ...

    @abc.abstractmethod
    def save_bulk(self, entities: Mapping[str, TEntity | Mapping[str, Any]]) -> None: ...

    @abc.abstractmethod
    def upsert(self, document_id: str, entity: TEntity | Mapping[str, Any]) -> None: ...

    @abc.abstractmethod
    def update(self, document_id: str, partial: TEntity | Mapping[str, Any]) -> None: ...

    @abc.abstractmethod
    def update_by_query(self, query: QueryLike, script: Mapping[str, Any]) -> Any: ...

    @abc.abstractmethod
    def delete(self, document_id: str) -> None: ...

    @abc.abstractmethod
    def delete_by_query(self, query: QueryLike, proceed_on_conflicts: bool = False) -> Any: ...

    @abc.abstractmethod
    def delete_bulk(self, *document_ids: str) -> None: ...

    # -- reads ----------------------------------------------------------

    @abc.abstractmethod
    def find_by_query(self, query: QueryLike) -> ResultIterator: ...

    @abc.abstractmethod
    def find_scrollable_by_query(
        self, query: QueryLike, scroll_context_keepalive: str | None = None
    ) -> ResultIterator: ...

    @abc.abstractmethod
    def find_by_scroll_id(
        self, scroll_id: str, scroll_context_keepalive: str | None = None
    ) -> ResultIterator: ...

    @abc.abstractmethod
    def clear_scroll_id(self, scroll_id: str) -> None: ...

    @abc.abstractmethod
    def find_by_id(
        self, document_id: str, source_fields: list[str] | None = None
    ) -> TEntity | dict[str, Any] | None: ...

    @abc.abstractmethod
    def find_by_ids(
        self, document_ids: list[str], source_fields: list[str] | None = None
    ) -> ResultIterator: ...

    @abc.abstractmethod
    def count(self) -> int: ...

    @abc.abstractmethod
    def count_by_query(self, query: QueryLike) -> int: ...

    @abc.abstractmethod
    def aggregate_by_query(self, query: QueryLike) -> AggregationResultSet: ...

    @abc.abstractmethod
    def aggregate_composite_by_query(
        self, query: CompositeAggregationQuery
    ) -> Iterator[CompositeResult]: ...


__all__ = ["SearchRepository", "TEntity"]
