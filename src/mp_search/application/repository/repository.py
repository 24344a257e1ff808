"""Application repository – Repository, request building and error translation.

Every public operation issues at most one request through the injected
:class:`~mp_search.kernel.ports.SearchClient` and blocks until it returns.
Client failures are logged once at error level and re-raised as the matching
:class:`~mp_search.kernel.errors.RepositoryError`, with the backend prefix
prepended to both.  "Not found" on read paths becomes an absent result.
"""
from __future__ import annotations

import json
from collections.abc import Callable, Iterator, Mapping
from typing import Any, ClassVar

from mp_search.application.query.base import QueryLike
from mp_search.application.query.composite import CompositeAggregationQuery
from mp_search.application.repository.configuration import RepositoryConfiguration
from mp_search.application.repository.entity import PersistableEntity
from mp_search.application.repository.operation import OperationType
from mp_search.application.result import (
    AggregationResultSet,
    CompositeResult,
    ResultIterator,
)
from mp_search.config.validation import RepositoryConfigurationError
from mp_search.kernel.errors import (
    BulkError,
    DeleteError,
    DocumentNotFoundError,
    ReadOperationError,
    RepositoryError,
    UpdateError,
    UpsertError,
    WriteOperationError,
)
from mp_search.kernel.ports import SearchClient, SearchRepository
from mp_search.kernel.ports.repository import TEntity
from mp_search.observability.logging import Logger, get_logger

DEFAULT_SCRIPT_LANG = "painless"


def _response_body(raw: Any) -> Mapping[str, Any]:
    """Unwrap client response objects (``ObjectApiResponse``) into their body map."""
    if isinstance(raw, Mapping):
        return raw
    body = getattr(raw, "body", None)
    return body if isinstance(body, Mapping) else {}


def _parse_count(raw: Mapping[str, Any]) -> int:
    return int(raw["count"])


class Repository(SearchRepository[TEntity]):
    """Search-backend repository bound to one configured index.

    Subclasses set :attr:`exception_prefix` and override
    :meth:`_not_found_errors` for their client library; the ``_post_*`` hooks
    run only after a successful write.
    """

    exception_prefix: ClassVar[str] = ""

    def __init__(
        self,
        client: SearchClient,
        configuration: RepositoryConfiguration | Mapping[str, Any],
        logger: Logger | None = None,
    ) -> None:
        self._client = client
        if not isinstance(configuration, RepositoryConfiguration):
            configuration = RepositoryConfiguration.from_mapping(configuration)
        self._config = configuration
        self._logger = logger or get_logger(__name__, repository=type(self).__name__)

    @property
    def client(self) -> SearchClient:
        return self._client

    @property
    def configuration(self) -> RepositoryConfiguration:
        return self._config

    def set_logger(self, logger: Logger) -> None:
        self._logger = logger

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(self, document_id: str, entity: TEntity | Mapping[str, Any]) -> None:
        document = self._prepare_document(entity)
        request = self._build_request_base(OperationType.WRITE)
        request["id"] = document_id
        request["body"] = document
        try:
            self._client.index(**request)
        except Exception as exc:
            raise self._wrap(UpsertError, exc, document_id=document_id, document=document) from exc
        self._post_save(document_id, document)

    def save_bulk(self, entities: Mapping[str, TEntity | Mapping[str, Any]]) -> None:
        if not entities:
            return
        operations: list[dict[str, Any]] = []
        for document_id, entity in entities.items():
            operations.append({"index": {"_id": document_id}})
            operations.append(self._prepare_document(entity))

        request = self._build_request_base(OperationType.WRITE)
        request["body"] = operations
        try:
            self._client.bulk(**request)
        except Exception as exc:
            raise self._wrap(BulkError, exc, operations=operations) from exc
        self._post_save_bulk(operations)

    def upsert(self, document_id: str, entity: TEntity | Mapping[str, Any]) -> None:
        document = self._prepare_document(entity)
        request = self._build_request_base(OperationType.WRITE)
        request["id"] = document_id
        request["body"] = {"doc": document, "doc_as_upsert": True}
        try:
            self._client.update(**request)
        except Exception as exc:
            raise self._wrap(UpsertError, exc, document_id=document_id, document=document) from exc
        self._post_upsert(document_id, document)

    def update(self, document_id: str, partial: TEntity | Mapping[str, Any]) -> None:
        document = self._prepare_document(partial)
        request = self._build_request_base(OperationType.WRITE)
        request["id"] = document_id
        request["body"] = {"doc": document}
        try:
            self._client.update(**request)
        except Exception as exc:
            raise self._wrap(UpdateError, exc, document_id=document_id, document=document) from exc
        self._post_update(document_id, document)

    def update_by_query(self, query: QueryLike, script: Mapping[str, Any]) -> Any:
        body = query.to_dict()
        normalized = self.sanitize_script(script)
        body["script"] = normalized.get("script", normalized)
        request = self._build_request_base(OperationType.WRITE)
        request["body"] = body
        return self._execute_write(lambda: self._client.update_by_query(**request))

    def delete(self, document_id: str) -> None:
        request = self._build_request_base(OperationType.WRITE)
        request["id"] = document_id
        try:
            self._client.delete(**request)
        except Exception as exc:
            if self._is_not_found(exc):
                raise DocumentNotFoundError(
                    document_id, prefix=self.exception_prefix, cause=exc
                ) from exc
            raise self._wrap(DeleteError, exc, document_id=document_id) from exc
        self._post_delete(document_id)

    def delete_by_query(self, query: QueryLike, proceed_on_conflicts: bool = False) -> Any:
        request = self._build_request_base(OperationType.WRITE)
        request["body"] = query.to_dict()
        if proceed_on_conflicts:
            request["conflicts"] = "proceed"
        return self._execute_write(lambda: self._client.delete_by_query(**request))

    def delete_bulk(self, *document_ids: str) -> None:
        if not document_ids:
            return
        operations = [{"delete": {"_id": document_id}} for document_id in document_ids]
        request = self._build_request_base(OperationType.WRITE)
        request["body"] = operations
        try:
            self._client.bulk(**request)
        except Exception as exc:
            raise self._wrap(BulkError, exc, operations=operations) from exc
        self._post_delete_bulk(list(document_ids))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def find_by_query(self, query: QueryLike) -> ResultIterator[Any]:
        request = self._build_search_request(query)
        raw = self._execute_read(lambda: self._client.search(**request), query=request["body"])
        return self._parse_search_response(raw)

    def find_scrollable_by_query(
        self, query: QueryLike, scroll_context_keepalive: str | None = None
    ) -> ResultIterator[Any]:
        """Open a scroll cursor; pass ``scroll_id`` of the result to :meth:`find_by_scroll_id`."""
        request = self._build_search_request(query)
        request["scroll"] = scroll_context_keepalive or self._config.scroll_context_keepalive
        raw = self._execute_read(lambda: self._client.search(**request), query=request["body"])
        return self._parse_search_response(raw)

    def find_by_scroll_id(
        self, scroll_id: str, scroll_context_keepalive: str | None = None
    ) -> ResultIterator[Any]:
        """Fetch the next page of an open scroll cursor.

        The cursor stays open until :meth:`clear_scroll_id` is called.
        """
        request = {
            "scroll_id": scroll_id,
            "scroll": scroll_context_keepalive or self._config.scroll_context_keepalive,
        }
        raw = self._execute_read(lambda: self._client.scroll(**request))
        return self._parse_search_response(raw)

    def clear_scroll_id(self, scroll_id: str) -> None:
        try:
            self._client.clear_scroll(scroll_id=scroll_id)
        except Exception as exc:
            raise self._wrap(RepositoryError, exc) from exc

    def find_by_id(
        self, document_id: str, source_fields: list[str] | None = None
    ) -> TEntity | dict[str, Any] | None:
        request = self._build_request_base(OperationType.READ)
        request["id"] = document_id
        if source_fields:
            request["_source"] = list(source_fields)
        try:
            raw = _response_body(self._client.get(**request))
        except Exception as exc:
            if self._is_not_found(exc):
                return None
            raise self._wrap(ReadOperationError, exc, query={"id": document_id}) from exc
        if not raw.get("found"):
            return None
        return self._to_entity(raw)

    def find_by_ids(
        self, document_ids: list[str], source_fields: list[str] | None = None
    ) -> ResultIterator[Any]:
        if not document_ids:
            return ResultIterator()
        docs: list[dict[str, Any]] = []
        for document_id in document_ids:
            doc: dict[str, Any] = {"_id": document_id}
            if source_fields:
                doc["_source"] = list(source_fields)
            docs.append(doc)

        request = self._build_request_base(OperationType.READ)
        request["body"] = {"docs": docs}
        try:
            raw = _response_body(self._client.mget(**request))
        except Exception as exc:
            self._logger.critical(
                f"{self.exception_prefix}Request error",
                request=json.dumps(request, default=str),
            )
            raise self._wrap(ReadOperationError, exc, query=request["body"]) from exc

        results: ResultIterator[Any] = ResultIterator()
        for hit in raw.get("docs", []):
            if hit.get("found"):
                results.append(self._to_entity(hit))
        return results.with_total(len(results))

    def count(self) -> int:
        request = self._build_request_base(OperationType.READ)
        return self._execute_read(lambda: self._client.count(**request), parse=_parse_count)

    def count_by_query(self, query: QueryLike) -> int:
        request = self._build_request_base(OperationType.READ)
        request["body"] = query.to_dict()
        return self._execute_read(
            lambda: self._client.count(**request), query=request["body"], parse=_parse_count
        )

    def aggregate_by_query(self, query: QueryLike) -> AggregationResultSet:
        request = self._build_search_request(query)
        raw = self._execute_read(lambda: self._client.search(**request), query=request["body"])
        return AggregationResultSet.from_raw(raw.get("aggregations")).with_documents(
            self._parse_search_response(raw)
        )

    def aggregate_composite_by_query(
        self, query: CompositeAggregationQuery
    ) -> Iterator[CompositeResult]:
        """Lazily walk every bucket of a composite aggregation.

        The next page is requested only when the consumer asks for the item
        after the last buffered bucket; iteration ends once the response
        carries no ``after_key``.  Buckets with an empty key or a zero
        document count are skipped.
        """
        return self._iterate_composite(query, query.get_name())

    def _iterate_composite(
        self,
        query: CompositeAggregationQuery,
        name: str,
        size: int | None = None,
    ) -> Iterator[CompositeResult]:
        after_key = query.after_key
        while True:
            raw_query = query.with_after_key(after_key).get_query()
            if size is not None:
                raw_query.limit(size)
            result = self.aggregate_by_query(raw_query).result(name)
            fields = result.fields if result is not None else {}

            for bucket in fields.get("buckets", []):
                key = bucket.get("key")
                doc_count = bucket.get("doc_count")
                if key and doc_count:
                    yield CompositeResult(key, doc_count, name)

            after_key = fields.get("after_key")
            if after_key is None:
                return

    # ------------------------------------------------------------------
    # Post-operation hooks
    # ------------------------------------------------------------------

    def _post_save(self, document_id: str, document: dict[str, Any]) -> None:
        pass

    def _post_save_bulk(self, operations: list[dict[str, Any]]) -> None:
        pass

    def _post_upsert(self, document_id: str, document: dict[str, Any]) -> None:
        pass

    def _post_update(self, document_id: str, document: dict[str, Any]) -> None:
        pass

    def _post_delete(self, document_id: str) -> None:
        pass

    def _post_delete_bulk(self, document_ids: list[str]) -> None:
        pass

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def sanitize_script(script: Mapping[str, Any]) -> dict[str, Any]:
        """Normalise ``{"source", "lang", "params"}`` into ``{"script": {...}}``.

        Maps that already hold a ``script`` key, or a single entry, are
        returned unchanged.
        """
        if "script" not in script and len(script) > 1:
            return {
                "script": {
                    "lang": script.get("lang", DEFAULT_SCRIPT_LANG),
                    "source": script.get("source"),
                    "params": dict(script.get("params") or {}),
                }
            }
        return dict(script)

    def _not_found_errors(self) -> tuple[type[BaseException], ...]:
        return ()

    def _is_not_found(self, exc: BaseException) -> bool:
        errors = self._not_found_errors()
        return bool(errors) and isinstance(exc, errors)

    def _build_request_base(self, operation: OperationType) -> dict[str, Any]:
        request: dict[str, Any] = {"index": self._config.get_index(operation)}
        if operation is OperationType.WRITE and self._config.force_refresh_on_write:
            request["refresh"] = True
        return request

    def _build_search_request(self, query: QueryLike) -> dict[str, Any]:
        request = self._build_request_base(OperationType.READ)
        request["body"] = query.to_dict()
        if self._config.track_total_hits is not None:
            request["track_total_hits"] = self._config.track_total_hits
        return request

    def _execute_read(
        self,
        operation: Callable[[], Any],
        query: Any = None,
        parse: Callable[[Mapping[str, Any]], Any] | None = None,
    ) -> Any:
        try:
            raw = _response_body(operation())
            return parse(raw) if parse is not None else raw
        except Exception as exc:
            raise self._wrap(ReadOperationError, exc, query=query) from exc

    def _execute_write(self, operation: Callable[[], Any]) -> Mapping[str, Any]:
        try:
            return _response_body(operation())
        except Exception as exc:
            raise self._wrap(WriteOperationError, exc) from exc

    def _wrap(
        self,
        error_class: type[RepositoryError],
        exc: BaseException,
        **context: Any,
    ) -> RepositoryError:
        message = str(exc)
        self._logger.error(f"{self.exception_prefix}{message}")
        return error_class(message, prefix=self.exception_prefix, cause=exc, **context)

    def _prepare_document(self, entity: Any) -> dict[str, Any]:
        if isinstance(entity, Mapping):
            return dict(entity)
        if self._config.entity_serializer is not None:
            return self._config.entity_serializer.to_document(entity)
        if isinstance(entity, PersistableEntity):
            return entity.to_document()
        raise RepositoryConfigurationError(
            "No entity serializer configured while trying to persist object"
        )

    def _to_entity(self, hit: Mapping[str, Any]) -> Any:
        document = hit.get("_source") or {}
        meta = {key: value for key, value in hit.items() if key != "_source"}
        if self._config.entity_class is not None:
            return self._config.entity_class.from_document(document, meta)
        if self._config.entity_factory is not None:
            return self._config.entity_factory.from_document(document, meta)
        return dict(hit)

    def _parse_search_response(self, raw: Mapping[str, Any]) -> ResultIterator[Any]:
        hits = raw.get("hits") or {}
        total = hits.get("total", 0)
        if isinstance(total, Mapping):
            total = total.get("value", 0)
        return ResultIterator(
            items=[self._to_entity(hit) for hit in hits.get("hits", [])],
            total=int(total or 0),
            scroll_id=raw.get("_scroll_id"),
        )


__all__ = ["Repository"]
