"""Service layer: page scan document operations."""

import logging
import re
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel

from scan_storage.factories.partition_key_factory import PartitionKeyFactory
from scan_storage.infra.cosmos.cosmos_container_client import CosmosContainerClient
from scan_storage.models.documents import ItemType, PageScan, ScanStatus, to_document_dict
from scan_storage.models.query import ParameterizedQuery, QueryParameter, ensure_success_status_code
from scan_storage.services.paged_query_stream import PagedQueryStream, get_paged_query_stream
from scan_storage.utils.hash_generator import HashGenerator

logger = logging.getLogger(__name__)

_PROPERTY_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class PageScanProvider:
    """Page scan documents.

    A page scan is partitioned by its page id. Pages and website scans of
    the same website share a GUID node, so the scans of a website scan can
    be listed from the partition derived from the website scan id.
    """

    def __init__(
        self,
        cosmos_container_client: CosmosContainerClient,
        hash_generator: HashGenerator,
        partition_key_factory: PartitionKeyFactory,
        query_results_provider=get_paged_query_stream,
        get_current_date: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self.cosmos_container_client = cosmos_container_client
        self.hash_generator = hash_generator
        self.partition_key_factory = partition_key_factory
        self.query_results_provider = query_results_provider
        self.get_current_date = get_current_date

    def create_page_scan(self, page_id: str, website_scan_id: str, priority: int) -> PageScan:
        """Create a pending page scan.

        Args:
            page_id: Page ID
            website_scan_id: Website scan the page scan belongs to
            priority: Scan priority

        Returns:
            Created page scan
        """
        page_scan_doc = self._normalize_db_document(
            {
                "id": self.hash_generator.get_page_scan_document_id(page_id, website_scan_id),
                "pageId": page_id,
                "websiteScanId": website_scan_id,
                "priority": priority,
                "startDate": self.get_current_date().isoformat(),
                "scanStatus": ScanStatus.PENDING.value,
                "retryCount": 0,
            }
        )
        response = self.cosmos_container_client.write_document(page_scan_doc)
        ensure_success_status_code(response)
        logger.info("Created page scan %s for page %s", page_scan_doc["id"], page_id)
        return PageScan.model_validate(page_scan_doc)

    def update_page_scan(self, page_scan: BaseModel | dict[str, Any]) -> PageScan:
        page_scan_doc = self._normalize_db_document(to_document_dict(page_scan))
        response = self.cosmos_container_client.merge_or_write_document(page_scan_doc)
        ensure_success_status_code(response)
        return PageScan.model_validate(response.item)

    def read_page_scan(self, page_id: str, website_scan_id: str) -> PageScan:
        page_scan_id = self.hash_generator.get_page_scan_document_id(page_id, website_scan_id)
        response = self.cosmos_container_client.read_document(page_scan_id, self._get_page_scan_partition_key(page_id))
        ensure_success_status_code(response)
        return PageScan.model_validate(response.item)

    def read_page_scan_with_id(self, page_scan_id: str) -> PageScan:
        """Read a page scan when only its id is known (cross-partition lookup)."""
        response = self.cosmos_container_client.read_document(page_scan_id)
        ensure_success_status_code(response)
        return PageScan.model_validate(response.item)

    def get_page_scans_for_website_scan(
        self,
        website_scan_id: str,
        selected_properties: Sequence[str] | None = None,
    ) -> PagedQueryStream[Any]:
        """Lazily list the page scans of a website scan.

        Args:
            website_scan_id: Website scan ID
            selected_properties: Stored (camelCase) property names to project.
                If None, full PageScan models are returned; otherwise plain dicts.

        Returns:
            Stream of page scans
        """
        partition_key = self._get_page_scan_partition_key(website_scan_id)
        query = ParameterizedQuery(
            text=(
                f"SELECT {self._get_projection(selected_properties)} FROM c"
                " WHERE c.partitionKey = @partitionKey and c.itemType = @itemType"
                " and c.websiteScanId = @websiteScanId"
            ),
            parameters=(
                QueryParameter("@partitionKey", partition_key),
                QueryParameter("@itemType", ItemType.PAGE_SCAN.value),
                QueryParameter("@websiteScanId", website_scan_id),
            ),
        )
        converter = PageScan.model_validate if selected_properties is None else None
        return self.query_results_provider(self.cosmos_container_client, query, converter)

    def _get_projection(self, selected_properties: Sequence[str] | None) -> str:
        if selected_properties is None:
            return "*"
        if not selected_properties:
            raise ValueError("selected_properties must not be empty")
        for name in selected_properties:
            if not _PROPERTY_NAME_PATTERN.match(name):
                raise ValueError(f"Invalid property name: {name!r}")
        return ", ".join(f"c.{name}" for name in selected_properties)

    def _normalize_db_document(self, page_scan: dict[str, Any]) -> dict[str, Any]:
        if page_scan.get("id") is None:
            raise ValueError("Page scan document has no id")

        normalized_doc = {"itemType": ItemType.PAGE_SCAN.value, **page_scan}

        owner_id = page_scan.get("pageId") or page_scan.get("websiteScanId")
        if owner_id is not None and normalized_doc.get("partitionKey") is None:
            normalized_doc["partitionKey"] = self._get_page_scan_partition_key(owner_id)

        return normalized_doc

    def _get_page_scan_partition_key(self, page_or_website_scan_id: str) -> str:
        return self.partition_key_factory.create_partition_key_for_document(ItemType.PAGE_SCAN, page_or_website_scan_id)
