"""Application repository – entity (de)serialization hooks."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PersistableEntity(Protocol):
    """Entity class that converts itself to and from backend documents.

    ``meta`` is the raw hit without ``_source`` (``_id``, ``_index``,
    ``_score``, ...).
    """

    def to_document(self) -> dict[str, Any]: ...

    @classmethod
    def from_document(cls, document: Mapping[str, Any], meta: Mapping[str, Any]) -> Any: ...


@runtime_checkable
class EntityFactory(Protocol):
    def from_document(self, document: Mapping[str, Any], meta: Mapping[str, Any]) -> Any: ...


@runtime_checkable
class EntitySerializer(Protocol):
    def to_document(self, entity: Any) -> dict[str, Any]: ...


__all__ = ["EntityFactory", "EntitySerializer", "PersistableEntity"]
