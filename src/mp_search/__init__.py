"""
mp_search – document-search data-access library.

Import path convention::

    from mp_search.application.query import Filter, Query, Search
    from mp_search.application.repository import RepositoryConfiguration
    from mp_search.adapters.elasticsearch import ElasticsearchRepository
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
