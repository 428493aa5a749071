"""Cosmos DB container client returning status-coded responses."""

import copy
import logging
import time
from collections.abc import Callable
from typing import Any

from azure.core import MatchConditions
from azure.cosmos import ContainerProxy, CosmosClient
from azure.cosmos.exceptions import (
    CosmosAccessConditionFailedError,
    CosmosHttpResponseError,
    CosmosResourceNotFoundError,
)
from azure.identity import DefaultAzureCredential

from scan_storage.config.storage_config import StorageConfig, get_storage_config
from scan_storage.models.query import (
    CosmosOperationResponse,
    ParameterizedQuery,
    QueryDescriptor,
    as_query_descriptor,
)

logger = logging.getLogger(__name__)

COSMOS_SYSTEM_FIELDS = frozenset({"_rid", "_self", "_etag", "_attachments", "_ts"})

_DEFAULT_ERROR_STATUS = 500


def _strip_system_fields(document: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in document.items() if k not in COSMOS_SYSTEM_FIELDS}


def _merge_documents(target: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge source into a copy of target. Lists are replaced, not merged."""
    merged = copy.deepcopy(target)
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_documents(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _error_response(error: CosmosHttpResponseError) -> CosmosOperationResponse[Any]:
    return CosmosOperationResponse(
        status_code=error.status_code or _DEFAULT_ERROR_STATUS,
        error=error.message,
    )


class CosmosContainerClient:
    """Infrastructure layer: document operations against one Cosmos DB container.

    HTTP failures reported by the SDK are returned as non-success
    CosmosOperationResponse values so callers decide how to react.
    """

    def __init__(
        self,
        container: ContainerProxy,
        max_item_count: int | None = None,
        merge_max_retries: int = 3,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize container client.

        Args:
            container: Cosmos container proxy
            max_item_count: Page size hint for queries
            merge_max_retries: Attempts for ETag-guarded merge writes
            sleep: Backoff sleep function
        """
        self.container = container
        self.max_item_count = max_item_count
        self.merge_max_retries = merge_max_retries
        self._sleep = sleep

    @property
    def container_name(self) -> str:
        return self.container.id

    def query_documents(
        self,
        query: str | QueryDescriptor,
        continuation_token: str | None = None,
    ) -> CosmosOperationResponse[list[dict[str, Any]]]:
        """Fetch a single page of query results.

        Args:
            query: Query text or descriptor
            continuation_token: Token returned with the previous page, None for the first page

        Returns:
            Response whose item is the page of documents. continuation_token is None
            once the result set is exhausted.
        """
        descriptor = as_query_descriptor(query)
        parameters = descriptor.to_cosmos_parameters() if isinstance(descriptor, ParameterizedQuery) else None

        try:
            query_iterable = self.container.query_items(
                query=descriptor.text,
                parameters=parameters,
                enable_cross_partition_query=True,
                max_item_count=self.max_item_count,
            )
            pager = query_iterable.by_page(continuation_token)
            try:
                page = [_strip_system_fields(doc) for doc in next(pager)]
            except StopIteration:
                page = []
            next_token = pager.continuation_token or None
        except CosmosHttpResponseError as e:
            logger.error("Query failed on container %s: %s", self.container_name, e.message)
            return _error_response(e)

        logger.debug(
            "Queried %d documents from container %s (more: %s)",
            len(page),
            self.container_name,
            next_token is not None,
        )
        return CosmosOperationResponse(status_code=200, item=page, continuation_token=next_token)

    def read_document(
        self,
        document_id: str,
        partition_key: str | None = None,
    ) -> CosmosOperationResponse[dict[str, Any]]:
        """Read a document by id.

        Args:
            document_id: Document ID
            partition_key: Partition key value. If None, the document is looked up across partitions.

        Returns:
            Response with the document, or status 404 if not found
        """
        if partition_key is None:
            return self._read_document_cross_partition(document_id)

        try:
            document = self.container.read_item(item=document_id, partition_key=partition_key)
        except CosmosResourceNotFoundError:
            logger.debug("Document %s not found in container %s", document_id, self.container_name)
            return CosmosOperationResponse(status_code=404)
        except CosmosHttpResponseError as e:
            logger.error("Failed to read document %s from %s: %s", document_id, self.container_name, e.message)
            return _error_response(e)

        return CosmosOperationResponse(status_code=200, item=_strip_system_fields(document))

    def write_document(self, document: dict[str, Any]) -> CosmosOperationResponse[dict[str, Any]]:
        """Create or replace a document.

        Args:
            document: Full document including id and partitionKey

        Returns:
            Response with the stored document
        """
        try:
            written = self.container.upsert_item(body=document)
        except CosmosHttpResponseError as e:
            logger.error("Failed to write document %s to %s: %s", document.get("id"), self.container_name, e.message)
            return _error_response(e)

        logger.info("Wrote document %s to container %s", written["id"], self.container_name)
        return CosmosOperationResponse(status_code=200, item=_strip_system_fields(written))

    def merge_or_write_document(self, document: dict[str, Any]) -> CosmosOperationResponse[dict[str, Any]]:
        """Merge a partial document into the stored one, or write it if absent.

        The replace is guarded by the stored document's ETag and retried with
        exponential backoff on conflict.

        Args:
            document: Partial document. Must contain id.

        Returns:
            Response with the merged document
        """
        document_id = document["id"]
        partition_key = document.get("partitionKey")

        for attempt in range(self.merge_max_retries):
            try:
                existing = self._read_raw_document(document_id, partition_key)
                if existing is None:
                    return self.write_document(document)

                etag = existing.get("_etag")
                merged = _merge_documents(_strip_system_fields(existing), document)
                replaced = self.container.replace_item(
                    item=document_id,
                    body=merged,
                    etag=etag,
                    match_condition=MatchConditions.IfNotModified,
                )
                logger.info("Merged document %s in container %s", document_id, self.container_name)
                return CosmosOperationResponse(status_code=200, item=_strip_system_fields(replaced))

            except CosmosAccessConditionFailedError as e:
                # ETag conflict - retry
                if attempt < self.merge_max_retries - 1:
                    logger.warning(
                        "ETag conflict merging document %s in %s, attempt %d",
                        document_id,
                        self.container_name,
                        attempt + 1,
                    )
                    self._sleep(0.1 * (2**attempt))
                    continue
                logger.error("Failed to merge document %s after %d attempts", document_id, self.merge_max_retries)
                return _error_response(e)
            except CosmosHttpResponseError as e:
                logger.error("Failed to merge document %s in %s: %s", document_id, self.container_name, e.message)
                return _error_response(e)

        return CosmosOperationResponse(status_code=412, error="Merge retries exhausted")

    def delete_document(self, document_id: str, partition_key: str) -> CosmosOperationResponse[None]:
        """Delete a document.

        Args:
            document_id: Document ID
            partition_key: Partition key value

        Returns:
            Response with status 204, or 404 if the document did not exist
        """
        try:
            self.container.delete_item(item=document_id, partition_key=partition_key)
        except CosmosResourceNotFoundError:
            logger.warning("Document %s not found for deletion in %s", document_id, self.container_name)
            return CosmosOperationResponse(status_code=404)
        except CosmosHttpResponseError as e:
            logger.error("Failed to delete document %s from %s: %s", document_id, self.container_name, e.message)
            return _error_response(e)

        logger.info("Deleted document %s from container %s", document_id, self.container_name)
        return CosmosOperationResponse(status_code=204)

    def _read_raw_document(self, document_id: str, partition_key: str | None) -> dict[str, Any] | None:
        """Read a document with system fields intact. Raises SDK errors other than 404."""
        if partition_key is None:
            documents = list(
                self.container.query_items(
                    query="SELECT * FROM c WHERE c.id = @id",
                    parameters=[{"name": "@id", "value": document_id}],
                    enable_cross_partition_query=True,
                )
            )
            return documents[0] if documents else None

        try:
            return self.container.read_item(item=document_id, partition_key=partition_key)
        except CosmosResourceNotFoundError:
            return None

    def _read_document_cross_partition(self, document_id: str) -> CosmosOperationResponse[dict[str, Any]]:
        try:
            document = self._read_raw_document(document_id, None)
        except CosmosHttpResponseError as e:
            logger.error("Failed to read document %s from %s: %s", document_id, self.container_name, e.message)
            return _error_response(e)

        if document is None:
            logger.debug("Document %s not found in container %s", document_id, self.container_name)
            return CosmosOperationResponse(status_code=404)
        return CosmosOperationResponse(status_code=200, item=_strip_system_fields(document))


def create_cosmos_container_client(
    container_name: str,
    config: StorageConfig | None = None,
) -> CosmosContainerClient:
    """Create a container client from configuration.

    Uses key-based authentication when a key is configured, managed identity otherwise.

    Args:
        container_name: Container name
        config: Storage configuration. If None, will load from environment.

    Returns:
        CosmosContainerClient bound to the container
    """
    if config is None:
        config = get_storage_config()

    if not config.azure_cosmosdb_endpoint:
        raise ValueError("AZURE_COSMOSDB_ENDPOINT is required")

    if config.azure_cosmosdb_key:
        client = CosmosClient(url=config.azure_cosmosdb_endpoint, credential=config.azure_cosmosdb_key)
    else:
        client = CosmosClient(url=config.azure_cosmosdb_endpoint, credential=DefaultAzureCredential())

    container = client.get_database_client(config.cosmos_db).get_container_client(container_name)
    logger.debug("Created client for container %s in database %s", container_name, config.cosmos_db)
    return CosmosContainerClient(
        container,
        max_item_count=config.query_max_item_count,
        merge_max_retries=config.merge_max_retries,
    )
