"""Testing fixtures – pytest fixtures for the search client double.

Enable in ``conftest.py``::

    pytest_plugins = ["mp_search.testing.fixtures"]
"""
try:
    import pytest  # noqa: F401

    from mp_search.testing.fixtures.search import (
        repository_configuration,
        search_client,
        search_logger,
    )

except ImportError:
    pass

__all__ = ["repository_configuration", "search_client", "search_logger"]
