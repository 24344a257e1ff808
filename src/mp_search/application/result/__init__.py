"""Application result – documents, aggregation results and composite buckets."""
from mp_search.application.result.aggregation import AggregationResult, AggregationResultSet
from mp_search.application.result.composite import CompositeResult
from mp_search.application.result.iterator import ResultIterator

__all__ = ["AggregationResult", "AggregationResultSet", "CompositeResult", "ResultIterator"]
