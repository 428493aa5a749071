"""Service layer: website scan document operations."""

import logging
from typing import Any

from pydantic import BaseModel

from scan_storage.factories.partition_key_factory import PartitionKeyFactory
from scan_storage.infra.cosmos.cosmos_container_client import CosmosContainerClient
from scan_storage.models.documents import ItemType, ScanStatus, ScanType, WebsiteScan, to_document_dict
from scan_storage.models.query import (
    CosmosOperationResponse,
    ParameterizedQuery,
    QueryParameter,
    ensure_success_status_code,
)
from scan_storage.services.paged_query_stream import PagedQueryStream, get_paged_query_stream
from scan_storage.utils.guid_generator import GuidGenerator

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 0


class WebsiteScanProvider:
    """Website scan documents, partitioned alongside their website's pages."""

    def __init__(
        self,
        cosmos_container_client: CosmosContainerClient,
        guid_generator: GuidGenerator,
        partition_key_factory: PartitionKeyFactory,
        query_results_provider=get_paged_query_stream,
    ) -> None:
        self.cosmos_container_client = cosmos_container_client
        self.guid_generator = guid_generator
        self.partition_key_factory = partition_key_factory
        self.query_results_provider = query_results_provider

    def create_scan_document_for_website(
        self,
        website_id: str,
        scan_type: ScanType,
        frequency: str,
        priority: int | None = None,
    ) -> WebsiteScan:
        """Create a pending scan for a website.

        Args:
            website_id: Website ID
            scan_type: Scanner to run
            frequency: Cron expression
            priority: Scan priority. Defaults to 0.

        Returns:
            Created website scan
        """
        website_scan_doc = self._normalize_db_document(
            {
                "id": self.guid_generator.create_guid_from_base_guid(website_id),
                "websiteId": website_id,
                "scanType": ScanType(scan_type).value,
                "scanFrequency": frequency,
                "scanStatus": ScanStatus.PENDING.value,
                "priority": DEFAULT_PRIORITY if priority is None else priority,
            }
        )
        response = self.cosmos_container_client.write_document(website_scan_doc)
        ensure_success_status_code(response)
        logger.info("Created website scan %s for website %s", website_scan_doc["id"], website_id)
        return WebsiteScan.model_validate(website_scan_doc)

    def update_website_scan(self, website_scan: BaseModel | dict[str, Any]) -> WebsiteScan:
        website_scan_doc = self._normalize_db_document(to_document_dict(website_scan))
        response = self.cosmos_container_client.merge_or_write_document(website_scan_doc)
        ensure_success_status_code(response)
        return WebsiteScan.model_validate(response.item)

    def read_website_scan(self, website_scan_id: str) -> CosmosOperationResponse[dict[str, Any]]:
        """Read a website scan. Returns the raw response so callers can handle 404."""
        return self.cosmos_container_client.read_document(
            website_scan_id, self._get_website_scan_partition_key(website_scan_id)
        )

    def get_scans_for_website(self, website_id: str) -> PagedQueryStream[WebsiteScan]:
        partition_key = self._get_website_scan_partition_key(website_id)
        query = ParameterizedQuery(
            text=(
                "SELECT * FROM c WHERE c.partitionKey = @partitionKey"
                " and c.websiteId = @websiteId and c.itemType = @itemType"
            ),
            parameters=(
                QueryParameter("@websiteId", website_id),
                QueryParameter("@partitionKey", partition_key),
                QueryParameter("@itemType", ItemType.WEBSITE_SCAN.value),
            ),
        )
        return self.query_results_provider(self.cosmos_container_client, query, WebsiteScan.model_validate)

    def _normalize_db_document(self, website_scan: dict[str, Any]) -> dict[str, Any]:
        if website_scan.get("id") is None:
            raise ValueError("Website scan document has no id")

        return {
            "itemType": ItemType.WEBSITE_SCAN.value,
            "partitionKey": self._get_website_scan_partition_key(website_scan["id"]),
            **website_scan,
        }

    def _get_website_scan_partition_key(self, scan_or_website_id: str) -> str:
        return self.partition_key_factory.create_partition_key_for_document(ItemType.WEBSITE_SCAN, scan_or_website_id)
