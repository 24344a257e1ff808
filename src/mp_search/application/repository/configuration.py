"""Application repository – RepositoryConfiguration settings."""
from __future__ import annotations

import dataclasses
import importlib
import re
from typing import Any

from mp_search.application.repository.entity import (
    EntityFactory,
    EntitySerializer,
    PersistableEntity,
)
from mp_search.application.repository.operation import OperationType
from mp_search.config.settings import Settings
from mp_search.config.validation import InvalidSettingValueError, RepositoryConfigurationError

DEFAULT_SCROLL_CONTEXT_KEEPALIVE = "1m"

_TIME_UNIT = re.compile(r"^\d+(d|h|m|s|ms|micros|nanos)$")


def _import_class(path: str) -> Any:
    module_name, _, attr = path.replace(":", ".").rpartition(".")
    if not module_name:
        raise RepositoryConfigurationError("Given entity class does not exist.")
    try:
        return getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as exc:
        raise RepositoryConfigurationError("Given entity class does not exist.", cause=exc) from exc


@dataclasses.dataclass
class RepositoryConfiguration(Settings):
    """Index names, entity hooks and request flags of one repository.

    ``index`` fills whichever of ``index_read``/``index_write`` is not given.
    ``entity_class`` accepts a class or its dotted import path
    (``"app.models.Employee"`` or ``"app.models:Employee"``).
    """

    _prefix: dataclasses.ClassVar[str] = "SEARCH_REPOSITORY"

    index: str | None = None
    index_read: str | None = None
    index_write: str | None = None
    entity_class: Any = None
    entity_factory: Any = None
    entity_serializer: Any = None
    force_refresh_on_write: bool = False
    track_total_hits: bool | None = None
    scroll_context_keepalive: str = DEFAULT_SCROLL_CONTEXT_KEEPALIVE

    def _validate(self) -> None:
        self.index_read = self.index_read or self.index
        self.index_write = self.index_write or self.index
        self.force_refresh_on_write = bool(self.force_refresh_on_write)
        if self.track_total_hits is not None:
            self.track_total_hits = bool(self.track_total_hits)

        if not _TIME_UNIT.match(str(self.scroll_context_keepalive)):
            raise InvalidSettingValueError(
                "scroll_context_keepalive",
                self.scroll_context_keepalive,
                "Invalid value for scroll_context_keepalive given. Must be a valid time unit.",
            )

        if isinstance(self.entity_class, str):
            self.entity_class = _import_class(self.entity_class)
        if self.entity_class is not None and not (
            isinstance(self.entity_class, type) and issubclass(self.entity_class, PersistableEntity)
        ):
            raise RepositoryConfigurationError(
                f"Invalid entity class given. Must be of type {PersistableEntity.__name__}"
            )

        if self.entity_factory is not None and not isinstance(self.entity_factory, EntityFactory):
            raise RepositoryConfigurationError(
                f"Invalid entity factory given. Must be of type {EntityFactory.__name__}"
            )
        if self.entity_serializer is not None and not isinstance(self.entity_serializer, EntitySerializer):
            raise RepositoryConfigurationError(
                f"Invalid entity serializer given. Must be of type {EntitySerializer.__name__}"
            )

    def get_index(self, operation: OperationType | str) -> str:
        operation = OperationType(operation)
        index = self.index_read if operation is OperationType.READ else self.index_write
        if not index:
            raise RepositoryConfigurationError(
                f'No valid index name configured for operation "{operation.value}"'
            )
        return index


__all__ = ["DEFAULT_SCROLL_CONTEXT_KEEPALIVE", "RepositoryConfiguration"]
