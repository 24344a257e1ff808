"""Kernel value types – public re-export surface."""

from mp_search.kernel.types.enum import ConstantEnum

__all__ = ["ConstantEnum"]
