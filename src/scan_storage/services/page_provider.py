"""Service layer: page document operations."""

import logging
from typing import Any

from pydantic import BaseModel

from scan_storage.factories.partition_key_factory import PartitionKeyFactory
from scan_storage.infra.cosmos.cosmos_container_client import CosmosContainerClient
from scan_storage.models.documents import ItemType, Page, to_document_dict
from scan_storage.models.query import ParameterizedQuery, QueryParameter, ensure_success_status_code
from scan_storage.services.paged_query_stream import PagedQueryStream, get_paged_query_stream
from scan_storage.utils.guid_generator import GuidGenerator

logger = logging.getLogger(__name__)


class PageProvider:
    """Page documents.

    Page ids are derived from their website id, so a website's pages share
    one partition and can be listed with a single-partition query.
    """

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

    def create_page_for_website(self, page_url: str, website_id: str) -> Page:
        page = self._normalize_db_document(
            {
                "id": self.guid_generator.create_guid_from_base_guid(website_id),
                "websiteId": website_id,
                "url": page_url,
            }
        )
        response = self.cosmos_container_client.write_document(page)
        ensure_success_status_code(response)
        logger.info("Created page %s for website %s", page["id"], website_id)
        return Page.model_validate(response.item)

    def update_page(self, page: BaseModel | dict[str, Any]) -> Page:
        response = self.cosmos_container_client.merge_or_write_document(
            self._normalize_db_document(to_document_dict(page))
        )
        ensure_success_status_code(response)
        return Page.model_validate(response.item)

    def read_page(self, page_id: str) -> Page:
        response = self.cosmos_container_client.read_document(page_id, self._get_page_partition_key(page_id))
        ensure_success_status_code(response)
        return Page.model_validate(response.item)

    def get_pages_for_website(self, website_id: str) -> PagedQueryStream[Page]:
        """Lazily list all pages of a website.

        Args:
            website_id: Website ID

        Returns:
            Stream of pages, fetched page by page as it is consumed
        """
        partition_key = self._get_page_partition_key(website_id)
        query = ParameterizedQuery(
            text=(
                "SELECT * FROM c WHERE c.partitionKey = @partitionKey"
                " and c.websiteId = @websiteId and c.itemType = @itemType"
            ),
            parameters=(
                QueryParameter("@websiteId", website_id),
                QueryParameter("@partitionKey", partition_key),
                QueryParameter("@itemType", ItemType.PAGE.value),
            ),
        )
        return self.query_results_provider(self.cosmos_container_client, query, Page.model_validate)

    def _get_page_partition_key(self, page_or_website_id: str) -> str:
        return self.partition_key_factory.create_partition_key_for_document(ItemType.PAGE, page_or_website_id)

    def _normalize_db_document(self, page: dict[str, Any]) -> dict[str, Any]:
        if page.get("id") is None:
            raise ValueError("Page document has no associated id")

        return {
            "itemType": ItemType.PAGE.value,
            "partitionKey": self._get_page_partition_key(page["id"]),
            **page,
        }
