"""Kernel ports – search client and repository contracts."""

from mp_search.kernel.ports.client import SearchClient
from mp_search.kernel.ports.repository import SearchRepository

__all__ = ["SearchClient", "SearchRepository"]
