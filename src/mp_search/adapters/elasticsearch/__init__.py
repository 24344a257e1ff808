"""Elasticsearch adapter – repository over elasticsearch-py."""
from mp_search.adapters.elasticsearch.repository import ElasticsearchRepository

__all__ = ["ElasticsearchRepository"]
