"""Application query – criteria, aggregations and query composition."""
from mp_search.application.query.aggregation import GLOBAL, Aggregation, Bucket, Metric
from mp_search.application.query.base import (
    BaseQuery,
    Criteria,
    FilterCriteria,
    QueryLike,
    SearchCriteria,
    SortOrder,
)
from mp_search.application.query.bool_query import BoolOperator, BoolQuery, Must, MustNot, Should
from mp_search.application.query.composite import (
    CompositeAggregationQuery,
    SourceProperty,
    filter_null_and_empty,
)
from mp_search.application.query.filter import Filter
from mp_search.application.query.geo import GeoDistance, GeoDistanceValue, GeoShape, GeoShapeValue
from mp_search.application.query.operator import Operator
from mp_search.application.query.options import Optionable
from mp_search.application.query.query import FrozenQuery, Query
from mp_search.application.query.raw_query import RawQuery
from mp_search.application.query.search import Search, TextSearchType

__all__ = [
    "GLOBAL",
    "Aggregation",
    "BaseQuery",
    "BoolOperator",
    "BoolQuery",
    "Bucket",
    "CompositeAggregationQuery",
    "Criteria",
    "Filter",
    "FilterCriteria",
    "FrozenQuery",
    "GeoDistance",
    "GeoDistanceValue",
    "GeoShape",
    "GeoShapeValue",
    "Metric",
    "Must",
    "MustNot",
    "Operator",
    "Optionable",
    "Query",
    "QueryLike",
    "RawQuery",
    "Search",
    "SearchCriteria",
    "Should",
    "SortOrder",
    "SourceProperty",
    "TextSearchType",
    "filter_null_and_empty",
]
