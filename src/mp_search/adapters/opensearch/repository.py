"""OpenSearch adapter – OpenSearchRepository."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Self

from mp_search.application.repository import Repository, RepositoryConfiguration
from mp_search.kernel.errors import Prefixes
from mp_search.kernel.ports.repository import TEntity
from mp_search.observability.logging import Logger


def _require_opensearch() -> Any:
    try:
        import opensearchpy
        return opensearchpy
    except ImportError as exc:
        raise ImportError("Install 'mp-search[opensearch]' to use the OpenSearch adapter") from exc


class OpenSearchRepository(Repository[TEntity]):
    """Repository over an ``opensearchpy.OpenSearch`` client."""

    exception_prefix = Prefixes.OPENSEARCH

    @classmethod
    def from_hosts(
        cls,
        hosts: str | list[str],
        configuration: RepositoryConfiguration | Mapping[str, Any],
        *,
        logger: Logger | None = None,
        **client_kwargs: Any,
    ) -> Self:
        opensearchpy = _require_opensearch()
        client = opensearchpy.OpenSearch(hosts=hosts, **client_kwargs)
        return cls(client, configuration, logger=logger)

    def _not_found_errors(self) -> tuple[type[BaseException], ...]:
        # Clients injected without the library installed have no 404 class to match.
        try:
            return (_require_opensearch().NotFoundError,)
        except ImportError:
            return ()


__all__ = ["OpenSearchRepository"]
