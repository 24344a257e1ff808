"""Application repository – operation types used for index resolution."""
from __future__ import annotations

from mp_search.kernel.types import ConstantEnum


class OperationType(ConstantEnum):
    READ = "read"
    WRITE = "write"


__all__ = ["OperationType"]
