"""Repository errors – failures of operations dispatched to the search backend.

Every error raised at the repository boundary carries the backend prefix in
its message, the original client failure as ``cause`` and the context of the
attempted operation (document id, document body, query or bulk operations).
"""

from __future__ import annotations

from typing import Any

from mp_search.kernel.errors.base import BaseError


class Prefixes:
    """Backend-specific message prefixes."""

    ELASTICSEARCH = "Elasticsearch exception: "
    OPENSEARCH = "OpenSearch exception: "


class RepositoryError(BaseError):
    """Root of every repository operation error."""

    default_code = "repository_error"

    def __init__(self, message: str = "", *, prefix: str = "", **kwargs: Any) -> None:
        super().__init__(f"{prefix}{message}", **kwargs)
        self.prefix = prefix


class ReadOperationError(RepositoryError):
    default_code = "read_operation_failed"

    def __init__(self, message: str = "", *, query: Any = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.query = query


class WriteOperationError(RepositoryError):
    default_code = "write_operation_failed"


class BulkError(WriteOperationError):
    default_code = "bulk_operation_failed"

    def __init__(
        self,
        message: str = "",
        *,
        operations: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.operations: list[dict[str, Any]] = operations or []


class DocumentWriteError(WriteOperationError):
    """A write addressed to a single document failed."""

    default_code = "document_write_failed"

    def __init__(
        self,
        message: str = "",
        *,
        document_id: str,
        document: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("detail", {"document_id": document_id})
        super().__init__(message, **kwargs)
        self.document_id = document_id
        self.document: dict[str, Any] = document or {}


class UpdateError(DocumentWriteError):
    default_code = "update_failed"


class UpsertError(DocumentWriteError):
    default_code = "upsert_failed"


class DeleteError(RepositoryError):
    default_code = "delete_failed"

    def __init__(self, message: str = "", *, document_id: str, **kwargs: Any) -> None:
        kwargs.setdefault("detail", {"document_id": document_id})
        super().__init__(message, **kwargs)
        self.document_id = document_id


class DocumentNotFoundError(DeleteError):
    """No document exists under the given id."""

    default_code = "document_not_found"

    def __init__(self, document_id: str, *, prefix: str = "", **kwargs: Any) -> None:
        super().__init__(
            f'No document found with id "{document_id}"',
            document_id=document_id,
            prefix=prefix,
            **kwargs,
        )


class OperationNotAcknowledgedError(RepositoryError):
    default_code = "operation_not_acknowledged"


__all__ = [
    "BulkError",
    "DeleteError",
    "DocumentNotFoundError",
    "DocumentWriteError",
    "OperationNotAcknowledgedError",
    "Prefixes",
    "ReadOperationError",
    "RepositoryError",
    "UpdateError",
    "UpsertError",
    "WriteOperationError",
]
