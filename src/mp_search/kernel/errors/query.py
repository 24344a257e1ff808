"""Query errors – raised while composing criteria, aggregations and queries.

Two failure kinds are kept apart:

* :class:`InvalidQueryError`: caller input rejected synchronously when the
  offending object is built.
* :class:`QueryLogicError`: a keyword accepted at construction reached a
  serialization step that has no mapping for it.
"""

from __future__ import annotations

from typing import Any

from mp_search.kernel.errors.base import BaseError


class QueryError(BaseError):
    """Root of every query-composition error."""

    default_code = "query_error"


class InvalidQueryError(QueryError, ValueError):
    """Construction-time rejection of caller input."""

    default_code = "invalid_query"


class UnknownOperatorError(InvalidQueryError):
    default_code = "unknown_operator"

    def __init__(self, operator: Any) -> None:
        super().__init__(f'Unknown operator "{operator}" given', detail={"operator": str(operator)})
        self.operator = operator


class UnknownFullTextSearchTypeError(InvalidQueryError):
    default_code = "unknown_full_text_search_type"

    def __init__(self, search_type: Any) -> None:
        super().__init__(
            f'Unknown full text search type "{search_type}" given',
            detail={"type": str(search_type)},
        )
        self.search_type = search_type


class UnknownAggregationTypeError(InvalidQueryError):
    default_code = "unknown_aggregation_type"

    def __init__(self, aggregation_type: Any) -> None:
        super().__init__(
            f'Unknown type "{aggregation_type}" given',
            detail={"type": str(aggregation_type)},
        )
        self.aggregation_type = aggregation_type


class NoFieldsError(InvalidQueryError):
    default_code = "no_fields"

    def __init__(self) -> None:
        super().__init__("No fields given")


class InvalidSortDirectionError(InvalidQueryError):
    default_code = "invalid_sort_direction"

    def __init__(self, order: Any) -> None:
        super().__init__("Invalid sort direction given", detail={"order": str(order)})
        self.order = order


class InvalidSearchOperatorError(InvalidQueryError):
    default_code = "invalid_search_operator"

    def __init__(self, operator: Any) -> None:
        super().__init__(f"The value '{operator}' is not valid.", detail={"operator": str(operator)})
        self.operator = operator


class UnknownOptionError(InvalidQueryError):
    default_code = "unknown_option"

    def __init__(self, option: str) -> None:
        super().__init__(f'Unknown option "{option}" given.', detail={"option": option})
        self.option = option


class UnknownChildArgumentTypeError(InvalidQueryError):
    default_code = "unknown_child_argument_type"

    def __init__(self, argument_index: int) -> None:
        super().__init__(
            f"Argument #{argument_index} is of unknown type",
            detail={"argument_index": argument_index},
        )
        self.argument_index = argument_index


class InvalidSearchArgumentError(InvalidQueryError):
    default_code = "invalid_search_argument"


class InvalidFilterValueError(InvalidQueryError):
    default_code = "invalid_filter_value"


class MissingAggregationAttributesError(InvalidQueryError):
    default_code = "missing_aggregation_attributes"


class QueryLogicError(QueryError):
    """An accepted keyword has no serialization mapping."""

    default_code = "query_logic_error"


class UnhandledOperatorError(QueryLogicError):
    default_code = "unhandled_operator"

    def __init__(self, operator: Any) -> None:
        super().__init__(f'Unhandled operator "{operator}"', detail={"operator": str(operator)})
        self.operator = operator


class UnhandledFullTextSearchTypeError(QueryLogicError):
    default_code = "unhandled_full_text_search_type"

    def __init__(self, search_type: Any) -> None:
        super().__init__(
            f'Unhandled full text search type "{search_type}". '
            "Please add an appropriate switch case.",
            detail={"type": str(search_type)},
        )
        self.search_type = search_type


class NoOperatorDefinedError(QueryLogicError):
    default_code = "no_operator_defined"

    def __init__(self) -> None:
        super().__init__("No operator defined")


__all__ = [
    "InvalidFilterValueError",
    "InvalidQueryError",
    "InvalidSearchArgumentError",
    "InvalidSearchOperatorError",
    "InvalidSortDirectionError",
    "MissingAggregationAttributesError",
    "NoFieldsError",
    "NoOperatorDefinedError",
    "QueryError",
    "QueryLogicError",
    "UnhandledFullTextSearchTypeError",
    "UnhandledOperatorError",
    "UnknownAggregationTypeError",
    "UnknownChildArgumentTypeError",
    "UnknownFullTextSearchTypeError",
    "UnknownOperatorError",
    "UnknownOptionError",
]
