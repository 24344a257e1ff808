"""Kernel types – ConstantEnum, a closed set of string keywords."""
from __future__ import annotations

from enum import Enum
from typing import Any


class ConstantEnum(str, Enum):
    """String enum whose members are the only accepted keywords.

    Usage::

        class SortOrder(ConstantEnum):
            ASC = "asc"
            DESC = "desc"

        SortOrder.all()        # ["asc", "desc"]
        SortOrder.has("desc")  # True
    """

    @classmethod
    def all(cls) -> list[str]:
        """Return every member value in declaration order."""
        return [member.value for member in cls]

    @classmethod
    def has(cls, value: Any) -> bool:
        """Return ``True`` when *value* is a member or a member's value."""
        if isinstance(value, cls):
            return True
        return isinstance(value, str) and value in cls._value2member_map_

    def __str__(self) -> str:
        return self.value


__all__ = ["ConstantEnum"]
