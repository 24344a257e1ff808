"""Application repository – configuration, entity hooks and orchestration."""
from mp_search.application.repository.composite import CompositeAggregationRepository
from mp_search.application.repository.configuration import (
    DEFAULT_SCROLL_CONTEXT_KEEPALIVE,
    RepositoryConfiguration,
)
from mp_search.application.repository.entity import (
    EntityFactory,
    EntitySerializer,
    PersistableEntity,
)
from mp_search.application.repository.operation import OperationType
from mp_search.application.repository.repository import Repository

__all__ = [
    "DEFAULT_SCROLL_CONTEXT_KEEPALIVE",
    "CompositeAggregationRepository",
    "EntityFactory",
    "EntitySerializer",
    "OperationType",
    "PersistableEntity",
    "Repository",
    "RepositoryConfiguration",
]
