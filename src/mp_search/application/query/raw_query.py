"""Application query – RawQuery, a caller-supplied body plus pagination."""
from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Self

from mp_search.application.query.base import BaseQuery


class RawQuery(BaseQuery):
    """Send *raw* as-is; ``size``/``from``/``sort``/``_source`` set through the
    builder methods are merged underneath it."""

    def __init__(self, raw: Mapping[str, Any] | None = None) -> None:
        super().__init__()
        self._raw: dict[str, Any] = copy.deepcopy(dict(raw or {}))

    @classmethod
    def create(cls, raw: Mapping[str, Any] | None = None) -> Self:
        return cls(raw)

    @property
    def raw(self) -> dict[str, Any]:
        return self._raw

    def to_dict(self) -> dict[str, Any]:
        return {**self._build_base_body(), **copy.deepcopy(self._raw)}


__all__ = ["RawQuery"]
