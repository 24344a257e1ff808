"""Application query – geo value objects accepted by geo filters."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class GeoDistance(Protocol):
    """A centre point plus a radius such as ``"12km"``."""

    @property
    def location(self) -> Any: ...

    @property
    def distance(self) -> str: ...


@runtime_checkable
class GeoShape(Protocol):
    """Anything that serialises to a GeoJSON-like ``shape`` body."""

    def to_dict(self) -> dict[str, Any]: ...


@dataclass(frozen=True)
class GeoDistanceValue:
    location: Any
    distance: str


@dataclass(frozen=True)
class GeoShapeValue:
    type: str
    coordinates: Any

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "coordinates": self.coordinates}


__all__ = ["GeoDistance", "GeoDistanceValue", "GeoShape", "GeoShapeValue"]
