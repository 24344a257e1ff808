"""Application repository – CompositeAggregationRepository."""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from mp_search.application.query.base import FilterCriteria
from mp_search.application.query.composite import CompositeAggregationQuery, SourceProperty
from mp_search.application.repository.repository import Repository
from mp_search.application.result import CompositeResult


class CompositeAggregationRepository(Repository[Any]):
    """Repository specialised in grouped lookups over composite aggregations.

    Combine with a backend adapter::

        class SalaryRepository(CompositeAggregationRepository, ElasticsearchRepository):
            pass
    """

    def lookup(
        self,
        filters: Iterable[FilterCriteria],
        sources: Iterable[SourceProperty],
        aggregation_name: str,
    ) -> Iterator[CompositeResult]:
        """Yield every non-empty bucket grouped by *sources*; no documents are fetched."""
        query = (
            CompositeAggregationQuery.create()
            .with_name(aggregation_name)
            .with_filters(*filters)
            .with_sources(*sources)
        )
        return self._iterate_composite(query, query.get_name(), size=0)


__all__ = ["CompositeAggregationRepository"]
