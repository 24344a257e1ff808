"""Elasticsearch adapter – ElasticsearchRepository."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self

from mp_search.application.repository import Repository, RepositoryConfiguration
from mp_search.kernel.errors import Prefixes
from mp_search.kernel.ports.repository import TEntity
from mp_search.observability.logging import Logger


def _require_elasticsearch() -> Any:
    try:
        import elasticsearch
        return elasticsearch
    except ImportError as exc:
        raise ImportError("Install 'mp-search[elasticsearch]' to use the Elasticsearch adapter") from exc


class ElasticsearchRepository(Repository[TEntity]):
    """Repository over an ``elasticsearch.Elasticsearch`` client."""

    exception_prefix = Prefixes.ELASTICSEARCH

    @classmethod
    def from_hosts(
        cls,
        hosts: str | list[str],
        configuration: RepositoryConfiguration | Mapping[str, Any],
        *,
        logger: Logger | None = None,
        **client_kwargs: Any,
    ) -> Self:
        elasticsearch = _require_elasticsearch()
        client = elasticsearch.Elasticsearch(hosts, **client_kwargs)
        return cls(client, configuration, logger=logger)

    def _not_found_errors(self) -> tuple[type[BaseException], ...]:
        # Clients injected without the library installed have no 404 class to match.
        try:
            return (_require_elasticsearch().NotFoundError,)
        except ImportError:
            return ()


__all__ = ["ElasticsearchRepository"]
