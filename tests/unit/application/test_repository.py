"""Unit tests for Repository against the recording client double."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest

from mp_search.application.query import Filter, Query, RawQuery
from mp_search.application.repository import Repository, RepositoryConfiguration
from mp_search.config.validation import RepositoryConfigurationError
from mp_search.kernel.errors import (
    BulkError,
    DeleteError,
    DocumentNotFoundError,
    ReadOperationError,
    RepositoryError,
    UpdateError,
    UpsertError,
    WriteOperationError,
)
from mp_search.testing.fakes import FakeNotFoundError, RecordingSearchClient

PREFIX = "Test exception: "


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@dataclasses.dataclass
class Employee:
    name: str
    id: str | None = None

    def to_document(self) -> dict[str, Any]:
        return {"name": self.name}

    @classmethod
    def from_document(cls, document: Mapping[str, Any], meta: Mapping[str, Any]) -> Employee:
        return cls(name=document["name"], id=meta.get("_id"))


class UppercaseSerializer:
    def to_document(self, entity: Any) -> dict[str, Any]:
        return {"name": entity.name.upper()}


class TupleFactory:
    def from_document(self, document: Mapping[str, Any], meta: Mapping[str, Any]) -> Any:
        return (meta["_id"], document["name"])


class DocumentRepository(Repository[Any]):
    exception_prefix = PREFIX

    def _not_found_errors(self) -> tuple[type[BaseException], ...]:
        return (FakeNotFoundError,)


def _hits(*sources: dict[str, Any], total: int | None = None) -> dict[str, Any]:
    return {
        "hits": {
            "total": {"value": len(sources) if total is None else total, "relation": "eq"},
            "hits": [{"_id": str(i), "_index": "documents", "_source": s} for i, s in enumerate(sources)],
        }
    }


@pytest.fixture()
def repository(
    search_client: RecordingSearchClient,
    repository_configuration: RepositoryConfiguration,
    search_logger: MagicMock,
) -> DocumentRepository:
    return DocumentRepository(search_client, repository_configuration, search_logger)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_mapping_configuration(self, search_client: RecordingSearchClient) -> None:
        repository = DocumentRepository(search_client, {"index": "docs", "unrelated": 1}, MagicMock())
        assert repository.configuration.index_read == "docs"
        assert repository.client is search_client

    def test_default_logger(self, search_client: RecordingSearchClient) -> None:
        repository = DocumentRepository(search_client, {"index": "docs"})
        new_logger = MagicMock()
        repository.set_logger(new_logger)
        search_client.queue("delete", RuntimeError("down"))
        with pytest.raises(DeleteError):
            repository.delete("1")
        new_logger.error.assert_called_once_with(f"{PREFIX}down")


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


class TestSave:
    def test_request(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        repository.save("1", {"name": "Ada"})
        assert search_client.calls_to("index")[0].request == {
            "index": "documents",
            "id": "1",
            "body": {"name": "Ada"},
        }

    def test_entity_is_serialised(
        self, repository: DocumentRepository, search_client: RecordingSearchClient
    ) -> None:
        repository.save("1", Employee("Ada"))
        assert search_client.calls_to("index")[0].request["body"] == {"name": "Ada"}

    def test_failure(
        self,
        repository: DocumentRepository,
        search_client: RecordingSearchClient,
        search_logger: MagicMock,
    ) -> None:
        cause = RuntimeError("cluster unavailable")
        search_client.queue("index", cause)
        with pytest.raises(UpsertError) as exc_info:
            repository.save("1", {"name": "Ada"})
        error = exc_info.value
        assert error.message == f"{PREFIX}cluster unavailable"
        assert error.cause is cause
        assert error.__cause__ is cause
        assert (error.document_id, error.document) == ("1", {"name": "Ada"})
        search_logger.error.assert_called_once_with(f"{PREFIX}cluster unavailable")

    def test_post_save_hook_runs_after_success(self, search_client: RecordingSearchClient) -> None:
        saved: list[str] = []

        class HookedRepository(DocumentRepository):
            def _post_save(self, document_id: str, document: dict[str, Any]) -> None:
                saved.append(document_id)

        repository = HookedRepository(search_client, {"index": "documents"}, MagicMock())
        repository.save("1", {"name": "Ada"})
        search_client.queue("index", RuntimeError("x"))
        with pytest.raises(UpsertError):
            repository.save("2", {"name": "Bob"})
        assert saved == ["1"]

    def test_force_refresh(self, search_client: RecordingSearchClient) -> None:
        configuration = RepositoryConfiguration(index="documents", force_refresh_on_write=True)
        repository = DocumentRepository(search_client, configuration, MagicMock())
        repository.save("1", {"name": "Ada"})
        repository.find_by_query(Query())
        assert search_client.calls_to("index")[0].request["refresh"] is True
        assert "refresh" not in search_client.calls_to("search")[0].request

    def test_write_index(self, search_client: RecordingSearchClient) -> None:
        configuration = RepositoryConfiguration(index_read="docs-read", index_write="docs-write")
        repository = DocumentRepository(search_client, configuration, MagicMock())
        repository.save("1", {"name": "Ada"})
        search_client.queue("count", {"count": 0})
        repository.count()
        assert search_client.calls_to("index")[0].request["index"] == "docs-write"
        assert search_client.calls_to("count")[0].request["index"] == "docs-read"

    def test_missing_write_index(self, search_client: RecordingSearchClient) -> None:
        repository = DocumentRepository(search_client, {"index_read": "docs"}, MagicMock())
        with pytest.raises(RepositoryConfigurationError) as exc_info:
            repository.save("1", {"name": "Ada"})
        assert exc_info.value.message == 'No valid index name configured for operation "write"'
        assert search_client.calls == []

    def test_unserialisable_entity(self, repository: DocumentRepository) -> None:
        with pytest.raises(RepositoryConfigurationError) as exc_info:
            repository.save("1", object())  # type: ignore[arg-type]
        assert exc_info.value.message == "No entity serializer configured while trying to persist object"

    def test_serializer_wins_over_entity(self, search_client: RecordingSearchClient) -> None:
        configuration = RepositoryConfiguration(index="documents", entity_serializer=UppercaseSerializer())
        repository = DocumentRepository(search_client, configuration, MagicMock())
        repository.save("1", Employee("Ada"))
        assert search_client.calls_to("index")[0].request["body"] == {"name": "ADA"}


class TestBulkWrites:
    def test_save_bulk(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        repository.save_bulk({"1": {"name": "Ada"}, "2": Employee("Bob")})
        assert search_client.calls_to("bulk")[0].request == {
            "index": "documents",
            "body": [
                {"index": {"_id": "1"}},
                {"name": "Ada"},
                {"index": {"_id": "2"}},
                {"name": "Bob"},
            ],
        }

    def test_save_bulk_empty(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        repository.save_bulk({})
        assert search_client.calls == []

    def test_save_bulk_failure(
        self, repository: DocumentRepository, search_client: RecordingSearchClient
    ) -> None:
        search_client.queue("bulk", RuntimeError("rejected"))
        with pytest.raises(BulkError) as exc_info:
            repository.save_bulk({"1": {"name": "Ada"}})
        assert exc_info.value.operations == [{"index": {"_id": "1"}}, {"name": "Ada"}]
        assert isinstance(exc_info.value, WriteOperationError)

    def test_delete_bulk(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        repository.delete_bulk("1", "2")
        assert search_client.calls_to("bulk")[0].request["body"] == [
            {"delete": {"_id": "1"}},
            {"delete": {"_id": "2"}},
        ]

    def test_delete_bulk_empty(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        repository.delete_bulk()
        assert search_client.calls == []


class TestUpdates:
    def test_upsert(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        repository.upsert("1", {"name": "Ada"})
        assert search_client.calls_to("update")[0].request == {
            "index": "documents",
            "id": "1",
            "body": {"doc": {"name": "Ada"}, "doc_as_upsert": True},
        }

    def test_update(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        repository.update("1", {"name": "Ada"})
        assert search_client.calls_to("update")[0].request["body"] == {"doc": {"name": "Ada"}}

    def test_update_failure(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        search_client.queue("update", RuntimeError("conflict"))
        with pytest.raises(UpdateError) as exc_info:
            repository.update("1", {"name": "Ada"})
        assert exc_info.value.document_id == "1"
        assert not isinstance(exc_info.value, UpsertError)

    def test_update_by_query(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        search_client.queue("update_by_query", {"updated": 3})
        result = repository.update_by_query(
            Query(Filter("team", "core")),
            {"source": "ctx._source.n += params.n", "params": {"n": 1}},
        )
        body = search_client.calls_to("update_by_query")[0].request["body"]
        assert body["script"] == {
            "lang": "painless",
            "source": "ctx._source.n += params.n",
            "params": {"n": 1},
        }
        assert body["query"]["bool"]["filter"] == {"bool": {"must": [{"term": {"team": "core"}}]}}
        assert result == {"updated": 3}

    def test_update_by_query_failure(
        self, repository: DocumentRepository, search_client: RecordingSearchClient
    ) -> None:
        search_client.queue("update_by_query", RuntimeError("timeout"))
        with pytest.raises(WriteOperationError) as exc_info:
            repository.update_by_query(Query(), {"source": "x", "lang": "painless"})
        assert exc_info.value.message == f"{PREFIX}timeout"


class TestSanitizeScript:
    def test_defaults(self) -> None:
        assert Repository.sanitize_script({"source": "x", "params": None}) == {
            "script": {"lang": "painless", "source": "x", "params": {}}
        }

    def test_wrapped_script_is_unchanged(self) -> None:
        script = {"script": {"source": "x"}}
        assert Repository.sanitize_script(script) == script

    def test_single_entry_is_unchanged(self) -> None:
        assert Repository.sanitize_script({"source": "x"}) == {"source": "x"}


class TestDelete:
    def test_request(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        repository.delete("1")
        assert search_client.calls_to("delete")[0].request == {"index": "documents", "id": "1"}

    def test_not_found(
        self,
        repository: DocumentRepository,
        search_client: RecordingSearchClient,
        search_logger: MagicMock,
    ) -> None:
        search_client.queue("delete", FakeNotFoundError("missing"))
        with pytest.raises(DocumentNotFoundError) as exc_info:
            repository.delete("42")
        assert exc_info.value.message == f'{PREFIX}No document found with id "42"'
        assert exc_info.value.document_id == "42"
        search_logger.error.assert_not_called()

    def test_other_failure(
        self,
        repository: DocumentRepository,
        search_client: RecordingSearchClient,
        search_logger: MagicMock,
    ) -> None:
        search_client.queue("delete", RuntimeError("boom"))
        with pytest.raises(DeleteError) as exc_info:
            repository.delete("42")
        assert not isinstance(exc_info.value, DocumentNotFoundError)
        search_logger.error.assert_called_once_with(f"{PREFIX}boom")

    def test_not_found_without_backend_mapping(self, search_client: RecordingSearchClient) -> None:
        repository: Repository[Any] = Repository(search_client, {"index": "documents"}, MagicMock())
        search_client.queue("delete", FakeNotFoundError("missing"))
        with pytest.raises(DeleteError) as exc_info:
            repository.delete("42")
        assert not isinstance(exc_info.value, DocumentNotFoundError)

    def test_delete_by_query(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        repository.delete_by_query(Query(Filter("team", "core")), proceed_on_conflicts=True)
        repository.delete_by_query(Query())
        first, second = search_client.calls_to("delete_by_query")
        assert first.request["conflicts"] == "proceed"
        assert "conflicts" not in second.request


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


class TestFindByQuery:
    def test_documents_and_total(
        self, repository: DocumentRepository, search_client: RecordingSearchClient
    ) -> None:
        search_client.queue("search", _hits({"name": "Ada"}, {"name": "Bob"}, total=40))
        result = repository.find_by_query(Query().limit(2))
        assert result.total == 40
        assert [hit["_source"]["name"] for hit in result] == ["Ada", "Bob"]
        assert search_client.calls_to("search")[0].request == {"index": "documents", "body": {"size": 2}}

    def test_legacy_integer_total(
        self, repository: DocumentRepository, search_client: RecordingSearchClient
    ) -> None:
        search_client.queue("search", {"hits": {"total": 7, "hits": []}})
        assert repository.find_by_query(Query()).total == 7

    def test_response_object_is_unwrapped(
        self, repository: DocumentRepository, search_client: RecordingSearchClient
    ) -> None:
        search_client.queue("search", SimpleNamespace(body=_hits({"name": "Ada"})))
        assert len(repository.find_by_query(Query())) == 1

    def test_entity_class(self, search_client: RecordingSearchClient) -> None:
        configuration = RepositoryConfiguration(index="documents", entity_class=Employee)
        repository = DocumentRepository(search_client, configuration, MagicMock())
        search_client.queue("search", _hits({"name": "Ada"}))
        assert repository.find_by_query(Query()).first() == Employee("Ada", "0")

    def test_entity_class_wins_over_factory(self, search_client: RecordingSearchClient) -> None:
        configuration = RepositoryConfiguration(
            index="documents", entity_class=Employee, entity_factory=TupleFactory()
        )
        repository = DocumentRepository(search_client, configuration, MagicMock())
        search_client.queue("search", _hits({"name": "Ada"}))
        assert repository.find_by_query(Query()).as_list() == [Employee("Ada", "0")]

    def test_entity_factory(self, search_client: RecordingSearchClient) -> None:
        configuration = RepositoryConfiguration(index="documents", entity_factory=TupleFactory())
        repository = DocumentRepository(search_client, configuration, MagicMock())
        search_client.queue("search", _hits({"name": "Ada"}))
        assert repository.find_by_query(Query()).as_list() == [("0", "Ada")]

    def test_track_total_hits(self, search_client: RecordingSearchClient) -> None:
        configuration = RepositoryConfiguration(index="documents", track_total_hits=True)
        repository = DocumentRepository(search_client, configuration, MagicMock())
        repository.find_by_query(Query())
        search_client.queue("count", {"count": 0})
        repository.count()
        assert search_client.calls_to("search")[0].request["track_total_hits"] is True
        assert "track_total_hits" not in search_client.calls_to("count")[0].request

    def test_failure(
        self,
        repository: DocumentRepository,
        search_client: RecordingSearchClient,
        search_logger: MagicMock,
    ) -> None:
        search_client.queue("search", RuntimeError("parse error"))
        with pytest.raises(ReadOperationError) as exc_info:
            repository.find_by_query(Query().limit(1))
        assert exc_info.value.message == f"{PREFIX}parse error"
        assert exc_info.value.query == {"size": 1}
        search_logger.error.assert_called_once_with(f"{PREFIX}parse error")


class TestFindById:
    def test_found(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        hit = {"_id": "1", "found": True, "_source": {"name": "Ada"}}
        search_client.queue("get", hit)
        assert repository.find_by_id("1", ["name"]) == hit
        assert search_client.calls_to("get")[0].request == {
            "index": "documents",
            "id": "1",
            "_source": ["name"],
        }

    def test_not_found_error(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        search_client.queue("get", FakeNotFoundError("missing"))
        assert repository.find_by_id("1") is None

    def test_found_false(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        search_client.queue("get", {"_id": "1", "found": False})
        assert repository.find_by_id("1") is None

    def test_failure(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        search_client.queue("get", RuntimeError("boom"))
        with pytest.raises(ReadOperationError):
            repository.find_by_id("1")


class TestFindByIds:
    def test_keeps_found_documents(
        self, repository: DocumentRepository, search_client: RecordingSearchClient
    ) -> None:
        search_client.queue(
            "mget",
            {
                "docs": [
                    {"_id": "1", "found": True, "_source": {"name": "Ada"}},
                    {"_id": "2", "found": False},
                ]
            },
        )
        result = repository.find_by_ids(["1", "2"], ["name"])
        assert [hit["_id"] for hit in result] == ["1"]
        assert result.total == 1
        assert search_client.calls_to("mget")[0].request["body"] == {
            "docs": [{"_id": "1", "_source": ["name"]}, {"_id": "2", "_source": ["name"]}]
        }

    def test_failure_logs_request(
        self,
        repository: DocumentRepository,
        search_client: RecordingSearchClient,
        search_logger: MagicMock,
    ) -> None:
        search_client.queue("mget", RuntimeError("boom"))
        with pytest.raises(ReadOperationError) as exc_info:
            repository.find_by_ids(["1"])
        assert exc_info.value.message == f"{PREFIX}boom"
        search_logger.critical.assert_called_once()
        args, kwargs = search_logger.critical.call_args
        assert args == (f"{PREFIX}Request error",)
        assert json.loads(kwargs["request"]) == {"index": "documents", "body": {"docs": [{"_id": "1"}]}}
        search_logger.error.assert_called_once_with(f"{PREFIX}boom")

    def test_no_ids_sends_no_request(
        self, repository: DocumentRepository, search_client: RecordingSearchClient
    ) -> None:
        result = repository.find_by_ids([])
        assert (result.as_list(), result.total) == ([], 0)
        assert search_client.calls == []


class TestCount:
    def test_count(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        search_client.queue("count", {"count": 12})
        assert repository.count() == 12
        assert search_client.calls_to("count")[0].request == {"index": "documents"}

    def test_count_by_query(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        search_client.queue("count", {"count": "3"})
        assert repository.count_by_query(RawQuery({"query": {"match_all": {}}})) == 3
        assert search_client.calls_to("count")[0].request["body"] == {"query": {"match_all": {}}}

    def test_failure(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        search_client.queue("count", RuntimeError("boom"))
        with pytest.raises(RepositoryError):
            repository.count()

    def test_response_without_count(
        self,
        repository: DocumentRepository,
        search_client: RecordingSearchClient,
        search_logger: MagicMock,
    ) -> None:
        search_client.queue("count", {"_shards": {"total": 1}})
        with pytest.raises(ReadOperationError) as exc_info:
            repository.count_by_query(Query())
        assert isinstance(exc_info.value.cause, KeyError)
        assert exc_info.value.query == {}
        search_logger.error.assert_called_once()


class TestAggregateByQuery:
    def test_results_and_documents(
        self, repository: DocumentRepository, search_client: RecordingSearchClient
    ) -> None:
        response = _hits({"name": "Ada"})
        response["aggregations"] = {"avg_age": {"value": 36.0}}
        search_client.queue("search", response)
        result = repository.aggregate_by_query(Query())
        assert result.result("avg_age").value == 36.0  # type: ignore[union-attr]
        assert result.documents is not None
        assert result.documents.total == 1

    def test_no_aggregations(self, repository: DocumentRepository, search_client: RecordingSearchClient) -> None:
        assert len(repository.aggregate_by_query(Query())) == 0
