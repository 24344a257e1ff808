"""Kernel – framework-agnostic building blocks (enums, errors, ports)."""

from mp_search.kernel.errors import (
    BaseError,
    QueryError,
    QueryLogicError,
    RepositoryError,
)
from mp_search.kernel.types import ConstantEnum

__all__ = [
    "BaseError",
    "ConstantEnum",
    "QueryError",
    "QueryLogicError",
    "RepositoryError",
]
