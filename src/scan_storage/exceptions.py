"""Exceptions raised by the scan storage layer."""

from typing import Any


class StorageError(Exception):
    """Base exception for scan storage."""


class StorageOperationError(StorageError):
    """Raised when the document store reports a non-success status code."""

    def __init__(self, status_code: int, body: Any = None, message: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"Document store operation failed with status code {status_code}")


class QueryExecutionError(StorageOperationError):
    """Raised when a page of a document query fails."""

    def __init__(self, status_code: int, body: Any = None, message: str | None = None) -> None:
        super().__init__(status_code, body, message or f"Query failed with status code {status_code}")


class InvalidIdentifierError(StorageError, ValueError):
    """Raised when an identifier is not a well-formed GUID."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Invalid GUID: {identifier!r}")
