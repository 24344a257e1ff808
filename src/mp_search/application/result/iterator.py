"""Application result – ResultIterator, one page of documents."""
from __future__ import annotations

import dataclasses
import functools
from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")


@dataclasses.dataclass
class ResultIterator(Generic[T]):
    """Ordered documents (raw maps or entities) plus the backend's total hit
    count and, for scroll searches, the cursor token of the next page."""

    items: list[T] = dataclasses.field(default_factory=list)
    total: int = 0
    scroll_id: str | None = None

    @classmethod
    def create(cls, items: Iterable[T] = ()) -> ResultIterator[T]:
        return cls(items=list(items))

    def with_total(self, total: int) -> ResultIterator[T]:
        self.total = total
        return self

    def with_scroll_id(self, scroll_id: str | None) -> ResultIterator[T]:
        self.scroll_id = scroll_id
        return self

    # ------------------------------------------------------------------
    # Sequence access
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> T:
        return self.items[index]

    def __setitem__(self, index: int, item: T) -> None:
        self.items[index] = item

    def __delitem__(self, index: int) -> None:
        del self.items[index]

    def append(self, item: T) -> ResultIterator[T]:
        self.items.append(item)
        return self

    push = append

    def as_list(self) -> list[T]:
        return list(self.items)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def first(self, predicate: Callable[[T], bool] | None = None) -> T | None:
        """Return the first item matching *predicate* (or the first item at all)."""
        for item in self.items:
            if predicate is None or predicate(item):
                return item
        return None

    def filter(self, predicate: Callable[[T], bool]) -> list[T]:
        return [item for item in self.items if predicate(item)]

    def some(self, predicate: Callable[[T], bool]) -> bool:
        return any(predicate(item) for item in self.items)

    def every(self, predicate: Callable[[T], bool]) -> bool:
        return all(predicate(item) for item in self.items)

    def each(self, fn: Callable[[T], Any]) -> None:
        for item in self.items:
            fn(item)

    def map(self, fn: Callable[[T], R]) -> list[R]:
        return [fn(item) for item in self.items]

    def reduce(self, fn: Callable[[Any, T], Any], initial: Any = None) -> Any:
        return functools.reduce(fn, self.items, initial)


__all__ = ["ResultIterator"]
