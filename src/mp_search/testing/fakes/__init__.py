"""Testing fakes – in-memory doubles for kernel ports."""
from mp_search.testing.fakes.client import FakeNotFoundError, RecordedCall, RecordingSearchClient

__all__ = ["FakeNotFoundError", "RecordedCall", "RecordingSearchClient"]
