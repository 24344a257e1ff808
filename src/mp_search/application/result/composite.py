"""Application result – CompositeResult, one bucket of a composite cursor."""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any


@dataclasses.dataclass(frozen=True)
class CompositeResult:
    results: Mapping[str, Any]
    documents_count: int
    aggregation_name: str


__all__ = ["CompositeResult"]
