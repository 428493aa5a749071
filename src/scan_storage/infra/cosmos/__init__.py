"""Cosmos DB infrastructure."""

from scan_storage.infra.cosmos.cosmos_container_client import CosmosContainerClient, create_cosmos_container_client

__all__ = ["CosmosContainerClient", "create_cosmos_container_client"]
