"""Testing – in-memory doubles for the search client port."""
from mp_search.testing.fakes import FakeNotFoundError, RecordedCall, RecordingSearchClient

__all__ = ["FakeNotFoundError", "RecordedCall", "RecordingSearchClient"]
