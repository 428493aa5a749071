"""Document storage layer for the accessibility scan metadata service."""

from scan_storage.exceptions import (
    InvalidIdentifierError,
    QueryExecutionError,
    StorageError,
    StorageOperationError,
)
from scan_storage.factories import PartitionKeyFactory
from scan_storage.services import PagedQueryStream, get_paged_query_stream

__all__ = [
    "InvalidIdentifierError",
    "PagedQueryStream",
    "PartitionKeyFactory",
    "QueryExecutionError",
    "StorageError",
    "StorageOperationError",
    "get_paged_query_stream",
]

__version__ = "0.1.0"
