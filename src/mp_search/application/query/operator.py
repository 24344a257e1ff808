"""Application query – filter operators."""
from __future__ import annotations

from mp_search.kernel.types import ConstantEnum


class Operator(ConstantEnum):
    EXISTS = "exists"
    PREFIX = "prefix"
    REGEXP = "regexp"
    TERM = "term"
    TERMS = "terms"
    LESS_THAN = "lt"
    GREATER_THAN = "gt"
    LESS_THAN_OR_EQUALS = "lte"
    GREATER_THAN_OR_EQUALS = "gte"
    BETWEEN = "between"
    GEO_DISTANCE = "geo_distance"
    GEO_SHAPE = "geo_shape"


__all__ = ["Operator"]
