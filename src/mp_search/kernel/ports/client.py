"""Search client port – the transport collaborator that executes requests."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SearchClient(Protocol):
    """Port: synchronous document-search client.

    Each method receives the request map built by the repository as keyword
    arguments (``index``, ``id``, ``body`` and flags such as ``refresh``) and
    returns the raw response map.  ``elasticsearch.Elasticsearch`` and
    ``opensearchpy.OpenSearch`` both satisfy this protocol.
    """

    def index(self, **request: Any) -> Any: ...
    def update(self, **request: Any) -> Any: ...
    def delete(self, **request: Any) -> Any: ...
    def bulk(self, **request: Any) -> Any: ...
    def get(self, **request: Any) -> Any: ...
    def mget(self, **request: Any) -> Any: ...
    def search(self, **request: Any) -> Any: ...
    def scroll(self, **request: Any) -> Any: ...
    def clear_scroll(self, **request: Any) -> Any: ...
    def count(self, **request: Any) -> Any: ...
    def update_by_query(self, **request: Any) -> Any: ...
    def delete_by_query(self, **request: Any) -> Any: ...


__all__ = ["SearchClient"]
