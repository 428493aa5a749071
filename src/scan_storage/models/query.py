"""Query descriptors and document store responses."""

from dataclasses import dataclass, field
from typing import Any

from scan_storage.exceptions import StorageOperationError


@dataclass(frozen=True)
class QueryParameter:
    """Named query parameter, e.g. ``@websiteId``."""

    name: str
    value: Any


@dataclass(frozen=True)
class RawQuery:
    """Query text without parameters."""

    text: str


@dataclass(frozen=True)
class ParameterizedQuery:
    """Query text with named parameters."""

    text: str
    parameters: tuple[QueryParameter, ...] = ()

    def to_cosmos_parameters(self) -> list[dict[str, Any]]:
        """Convert parameters to the shape accepted by ``query_items``."""
        return [{"name": p.name, "value": p.value} for p in self.parameters]


QueryDescriptor = RawQuery | ParameterizedQuery


def as_query_descriptor(query: str | QueryDescriptor) -> QueryDescriptor:
    """Normalize a plain query string to a RawQuery."""
    if isinstance(query, str):
        return RawQuery(text=query)
    if isinstance(query, (RawQuery, ParameterizedQuery)):
        return query
    raise TypeError(f"Unsupported query type: {type(query).__name__}")


@dataclass
class CosmosOperationResponse[T]:
    """Result of a single document store operation.

    Attributes:
        status_code: HTTP status code reported by the store
        item: Operation payload (a document, or a page of documents for queries)
        continuation_token: Set on query pages when more results remain
        error: Diagnostic body for failed operations
    """

    status_code: int
    item: T | None = None
    continuation_token: str | None = None
    error: Any = field(default=None, repr=False)

    @property
    def succeeded(self) -> bool:
        return 200 <= self.status_code <= 299


def ensure_success_status_code(
    response: CosmosOperationResponse[Any],
    error_type: type[StorageOperationError] = StorageOperationError,
) -> None:
    """Raise if the response does not carry a 2xx status code.

    Args:
        response: Document store response
        error_type: Exception type to raise on failure
    """
    if not response.succeeded:
        raise error_type(response.status_code, response.error)
