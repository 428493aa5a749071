"""Pytest configuration and fixtures."""

from typing import Any
from unittest.mock import MagicMock

import pytest

from scan_storage.factories.partition_key_factory import PartitionKeyFactory
from scan_storage.infra.cosmos.cosmos_container_client import CosmosContainerClient
from scan_storage.models.query import CosmosOperationResponse
from scan_storage.utils.guid_generator import GuidGenerator
from scan_storage.utils.hash_generator import HashGenerator


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests with no external dependencies")
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests that make real API calls"
    )


class FakeQueryClient:
    """Query client serving pre-built pages keyed by continuation token."""

    def __init__(self, pages: dict[str | None, CosmosOperationResponse[list[Any]]]) -> None:
        self.pages = pages
        self.calls: list[tuple[Any, str | None]] = []

    def query_documents(self, query, continuation_token=None):
        self.calls.append((query, continuation_token))
        return self.pages[continuation_token]

    @property
    def tokens_requested(self) -> list[str | None]:
        return [token for _, token in self.calls]


def ok_page(items: list[Any], continuation_token: str | None = None) -> CosmosOperationResponse[list[Any]]:
    return CosmosOperationResponse(status_code=200, item=items, continuation_token=continuation_token)


@pytest.fixture
def guid_generator() -> GuidGenerator:
    return GuidGenerator()


@pytest.fixture
def hash_generator() -> HashGenerator:
    return HashGenerator()


@pytest.fixture
def partition_key_factory(hash_generator, guid_generator) -> PartitionKeyFactory:
    return PartitionKeyFactory(hash_generator, guid_generator)


@pytest.fixture
def container_client_mock() -> MagicMock:
    """Container client mock whose writes echo the written document."""
    client = MagicMock(spec=CosmosContainerClient)
    client.write_document.side_effect = lambda doc: CosmosOperationResponse(status_code=200, item=doc)
    client.merge_or_write_document.side_effect = lambda doc: CosmosOperationResponse(status_code=200, item=doc)
    return client
