"""Service layer: website document operations."""

import logging
from typing import Any

from pydantic import BaseModel

from scan_storage.infra.cosmos.cosmos_container_client import CosmosContainerClient
from scan_storage.models.documents import ItemType, PartitionKey, Website, to_document_dict
from scan_storage.models.query import ensure_success_status_code
from scan_storage.utils.guid_generator import GuidGenerator

logger = logging.getLogger(__name__)


class WebsiteProvider:
    """Website documents. All websites share one static partition."""

    def __init__(self, cosmos_container_client: CosmosContainerClient, guid_generator: GuidGenerator) -> None:
        self.cosmos_container_client = cosmos_container_client
        self.guid_generator = guid_generator

    def create_website(self, website_data: BaseModel | dict[str, Any]) -> Website:
        """Create a website document with a new id.

        Args:
            website_data: Website fields without id

        Returns:
            Created website
        """
        website_doc = self._normalize_db_document(to_document_dict(website_data), self.guid_generator.create_guid())
        response = self.cosmos_container_client.write_document(website_doc)
        ensure_success_status_code(response)
        logger.info("Created website %s", website_doc["id"])
        return Website.model_validate(response.item)

    def update_website(self, website: BaseModel | dict[str, Any]) -> Website:
        website_doc = self._normalize_db_document(to_document_dict(website))
        response = self.cosmos_container_client.merge_or_write_document(website_doc)
        ensure_success_status_code(response)
        return Website.model_validate(response.item)

    def read_website(self, website_id: str) -> Website:
        response = self.cosmos_container_client.read_document(website_id, PartitionKey.WEBSITE_DOCUMENTS.value)
        ensure_success_status_code(response)
        return Website.model_validate(response.item)

    def _normalize_db_document(self, website: dict[str, Any], website_id: str | None = None) -> dict[str, Any]:
        if website_id is None and website.get("id") is None:
            raise ValueError("Website document has no associated id")

        return {
            "id": website_id,
            "itemType": ItemType.WEBSITE.value,
            "partitionKey": PartitionKey.WEBSITE_DOCUMENTS.value,
            **{k: v for k, v in website.items() if v is not None},
        }
