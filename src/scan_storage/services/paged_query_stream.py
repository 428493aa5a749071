"""Lazy iteration over paginated document query results."""

import logging
from collections.abc import Callable, Iterator
from typing import Any, Protocol

from scan_storage.exceptions import QueryExecutionError
from scan_storage.models.query import (
    CosmosOperationResponse,
    QueryDescriptor,
    as_query_descriptor,
    ensure_success_status_code,
)

logger = logging.getLogger(__name__)


class DocumentQueryClient(Protocol):
    """Executes one page of a document query."""

    def query_documents(
        self,
        query: str | QueryDescriptor,
        continuation_token: str | None = None,
    ) -> CosmosOperationResponse[list[Any]]: ...


class PagedQueryStream[T]:
    """Iterable over the full result set of a paginated query.

    Pages are fetched on demand, one at a time, following continuation
    tokens until the store returns none. Each call to iter() starts a new
    scan from the first page, so one stream can be consumed repeatedly and
    by independent consumers. Stopping early issues no further requests.

    A failed page raises QueryExecutionError when the consumer pulls past
    the last item already delivered.
    """

    def __init__(
        self,
        client: DocumentQueryClient,
        query: str | QueryDescriptor,
        converter: Callable[[Any], T] | None = None,
    ) -> None:
        self.client = client
        self.query = as_query_descriptor(query)
        self.converter = converter

    def __iter__(self) -> Iterator[T]:
        continuation_token: str | None = None
        page_count = 0
        while True:
            response = self.client.query_documents(self.query, continuation_token)
            page_count += 1
            if not response.succeeded:
                logger.error("Query page %d failed with status code %s", page_count, response.status_code)
            ensure_success_status_code(response, QueryExecutionError)

            continuation_token = response.continuation_token
            for item in response.item or []:
                yield self.converter(item) if self.converter is not None else item

            # An empty page that still carries a token is not the end
            if continuation_token is None:
                logger.debug("Query completed after %d page(s)", page_count)
                return


def get_paged_query_stream[T](
    client: DocumentQueryClient,
    query: str | QueryDescriptor,
    converter: Callable[[Any], T] | None = None,
) -> PagedQueryStream[T]:
    """Create a PagedQueryStream. Providers take this as an injectable seam."""
    return PagedQueryStream(client, query, converter)
