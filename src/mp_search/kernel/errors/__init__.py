"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── QueryError                        (query.py)
    │   ├── InvalidQueryError             construction-time, also ValueError
    │   │   ├── UnknownOperatorError
    │   │   ├── UnknownFullTextSearchTypeError
    │   │   ├── UnknownAggregationTypeError
    │   │   ├── UnknownOptionError
    │   │   ├── UnknownChildArgumentTypeError
    │   │   ├── NoFieldsError
    │   │   ├── InvalidSortDirectionError
    │   │   ├── InvalidSearchOperatorError
    │   │   ├── InvalidSearchArgumentError
    │   │   ├── InvalidFilterValueError
    │   │   └── MissingAggregationAttributesError
    │   └── QueryLogicError               serialization-time
    │       ├── UnhandledOperatorError
    │       ├── UnhandledFullTextSearchTypeError
    │       └── NoOperatorDefinedError
    └── RepositoryError                   (repository.py)
        ├── ReadOperationError
        ├── WriteOperationError
        │   ├── BulkError
        │   └── DocumentWriteError
        │       ├── UpdateError
        │       └── UpsertError
        ├── DeleteError
        │   └── DocumentNotFoundError
        └── OperationNotAcknowledgedError
"""

from mp_search.kernel.errors.base import BaseError
from mp_search.kernel.errors.query import (
    InvalidFilterValueError,
    InvalidQueryError,
    InvalidSearchArgumentError,
    InvalidSearchOperatorError,
    InvalidSortDirectionError,
    MissingAggregationAttributesError,
    NoFieldsError,
    NoOperatorDefinedError,
    QueryError,
    QueryLogicError,
    UnhandledFullTextSearchTypeError,
    UnhandledOperatorError,
    UnknownAggregationTypeError,
    UnknownChildArgumentTypeError,
    UnknownFullTextSearchTypeError,
    UnknownOperatorError,
    UnknownOptionError,
)
from mp_search.kernel.errors.repository import (
    BulkError,
    DeleteError,
    DocumentNotFoundError,
    DocumentWriteError,
    OperationNotAcknowledgedError,
    Prefixes,
    ReadOperationError,
    RepositoryError,
    UpdateError,
    UpsertError,
    WriteOperationError,
)

__all__ = [
    "BaseError",
    "BulkError",
    "DeleteError",
    "DocumentNotFoundError",
    "DocumentWriteError",
    "InvalidFilterValueError",
    "InvalidQueryError",
    "InvalidSearchArgumentError",
    "InvalidSearchOperatorError",
    "InvalidSortDirectionError",
    "MissingAggregationAttributesError",
    "NoFieldsError",
    "NoOperatorDefinedError",
    "OperationNotAcknowledgedError",
    "Prefixes",
    "QueryError",
    "QueryLogicError",
    "ReadOperationError",
    "RepositoryError",
    "UnhandledFullTextSearchTypeError",
    "UnhandledOperatorError",
    "UnknownAggregationTypeError",
    "UnknownChildArgumentTypeError",
    "UnknownFullTextSearchTypeError",
    "UnknownOperatorError",
    "UnknownOptionError",
    "UpdateError",
    "UpsertError",
    "WriteOperationError",
]
