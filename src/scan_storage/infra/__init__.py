"""Infrastructure layer for external communication."""

from scan_storage.infra.cosmos import CosmosContainerClient, create_cosmos_container_client

__all__ = ["CosmosContainerClient", "create_cosmos_container_client"]
