"""OpenSearch adapter – repository over opensearch-py."""
from mp_search.adapters.opensearch.repository import OpenSearchRepository

__all__ = ["OpenSearchRepository"]
