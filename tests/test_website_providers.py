"""Tests for website and website scan providers."""

from unittest.mock import MagicMock

import pytest

from conftest import FakeQueryClient, ok_page
from scan_storage.exceptions import StorageOperationError
from scan_storage.models.documents import ItemType, PartitionKey, ScanStatus, ScanType, Website, WebsiteScan
from scan_storage.models.query import CosmosOperationResponse, ParameterizedQuery
from scan_storage.services.website_provider import WebsiteProvider
from scan_storage.services.website_scan_provider import WebsiteScanProvider

pytestmark = pytest.mark.unit

WEBSITE_ID = "a6b7c8d0-1e2f-11ee-8c90-0242ac120002"


class TestWebsiteProvider:
    """Tests for WebsiteProvider."""

    @pytest.fixture
    def provider(self, container_client_mock, guid_generator) -> WebsiteProvider:
        return WebsiteProvider(container_client_mock, guid_generator)

    def test_create_website_assigns_id_and_static_partition(self, provider, container_client_mock):
        website = provider.create_website({"name": "Contoso", "baseUrl": "https://contoso.com"})

        written = container_client_mock.write_document.call_args.args[0]
        assert written["itemType"] == "website"
        assert written["partitionKey"] == "websiteDocuments"
        assert written["name"] == "Contoso"
        assert provider.guid_generator.is_valid_guid(written["id"])
        assert website.id == written["id"]
        assert website.base_url == "https://contoso.com"

    def test_create_website_accepts_model(self, provider, container_client_mock):
        data = Website(id="ignored", name="Contoso", base_url="https://contoso.com", scanners=[ScanType.A11Y])

        provider.create_website(data.model_copy(update={"id": None}))

        written = container_client_mock.write_document.call_args.args[0]
        assert written["scanners"] == ["a11y"]
        assert written["baseUrl"] == "https://contoso.com"

    def test_update_website_requires_id(self, provider, container_client_mock):
        with pytest.raises(ValueError, match="no associated id"):
            provider.update_website({"name": "Contoso"})

        container_client_mock.merge_or_write_document.assert_not_called()

    def test_update_website_merges_partial_document(self, provider, container_client_mock):
        container_client_mock.merge_or_write_document.side_effect = lambda doc: CosmosOperationResponse(
            status_code=200, item={**doc, "name": "Contoso", "baseUrl": "https://contoso.com"}
        )

        website = provider.update_website({"id": WEBSITE_ID, "priority": 5})

        container_client_mock.merge_or_write_document.assert_called_once_with(
            {"id": WEBSITE_ID, "itemType": "website", "partitionKey": "websiteDocuments", "priority": 5}
        )
        assert website.priority == 5

    def test_read_website(self, provider, container_client_mock):
        container_client_mock.read_document.return_value = CosmosOperationResponse(
            status_code=200,
            item={"id": WEBSITE_ID, "itemType": "website", "name": "Contoso", "baseUrl": "https://contoso.com"},
        )

        website = provider.read_website(WEBSITE_ID)

        assert website.name == "Contoso"
        container_client_mock.read_document.assert_called_once_with(WEBSITE_ID, PartitionKey.WEBSITE_DOCUMENTS.value)

    def test_read_website_not_found_raises(self, provider, container_client_mock):
        container_client_mock.read_document.return_value = CosmosOperationResponse(status_code=404)

        with pytest.raises(StorageOperationError) as exc_info:
            provider.read_website(WEBSITE_ID)

        assert exc_info.value.status_code == 404


class TestWebsiteScanProvider:
    """Tests for WebsiteScanProvider."""

    @pytest.fixture
    def provider(self, container_client_mock, guid_generator, partition_key_factory) -> WebsiteScanProvider:
        return WebsiteScanProvider(container_client_mock, guid_generator, partition_key_factory)

    def test_create_scan_document_for_website(self, provider, container_client_mock, partition_key_factory):
        website_scan = provider.create_scan_document_for_website(WEBSITE_ID, ScanType.A11Y, "0 0 * * *", 3)

        written = container_client_mock.write_document.call_args.args[0]
        assert written["websiteId"] == WEBSITE_ID
        assert written["scanType"] == "a11y"
        assert written["scanFrequency"] == "0 0 * * *"
        assert written["scanStatus"] == "pending"
        assert written["priority"] == 3
        assert written["itemType"] == "websiteScan"
        assert written["id"].endswith("-0242ac120002")
        assert written["partitionKey"] == partition_key_factory.create_partition_key_for_document(
            ItemType.WEBSITE_SCAN, WEBSITE_ID
        )
        assert isinstance(website_scan, WebsiteScan)
        assert website_scan.scan_status == ScanStatus.PENDING

    def test_create_scan_uses_default_priority(self, provider, container_client_mock):
        website_scan = provider.create_scan_document_for_website(WEBSITE_ID, "cookies", "0 0 * * *")

        assert website_scan.priority == 0
        assert website_scan.scan_type == ScanType.COOKIES

    def test_create_scan_write_failure_raises(self, provider, container_client_mock):
        container_client_mock.write_document.side_effect = None
        container_client_mock.write_document.return_value = CosmosOperationResponse(status_code=500)

        with pytest.raises(StorageOperationError):
            provider.create_scan_document_for_website(WEBSITE_ID, ScanType.A11Y, "0 0 * * *")

    def test_update_website_scan_requires_id(self, provider):
        with pytest.raises(ValueError, match="no id"):
            provider.update_website_scan({"scanStatus": "pass"})

    def test_update_website_scan_sets_partition_key(self, provider, container_client_mock, partition_key_factory):
        container_client_mock.merge_or_write_document.side_effect = lambda doc: CosmosOperationResponse(
            status_code=200,
            item={**doc, "websiteId": WEBSITE_ID, "scanType": "a11y", "scanFrequency": "0 0 * * *"},
        )

        website_scan = provider.update_website_scan({"id": WEBSITE_ID, "scanStatus": "pass"})

        merged = container_client_mock.merge_or_write_document.call_args.args[0]
        assert merged["partitionKey"] == partition_key_factory.create_partition_key_for_document(
            ItemType.WEBSITE_SCAN, WEBSITE_ID
        )
        assert website_scan.scan_status == ScanStatus.PASS

    def test_read_website_scan_returns_raw_response(self, provider, container_client_mock):
        not_found = CosmosOperationResponse(status_code=404)
        container_client_mock.read_document.return_value = not_found

        assert provider.read_website_scan(WEBSITE_ID) is not_found

    def test_get_scans_for_website_queries_website_partition(
        self, container_client_mock, guid_generator, partition_key_factory
    ):
        stream_provider = MagicMock()
        provider = WebsiteScanProvider(container_client_mock, guid_generator, partition_key_factory, stream_provider)

        result = provider.get_scans_for_website(WEBSITE_ID)

        client, query, converter = stream_provider.call_args.args
        assert result is stream_provider.return_value
        assert client is container_client_mock
        assert isinstance(query, ParameterizedQuery)
        assert {p.name: p.value for p in query.parameters} == {
            "@websiteId": WEBSITE_ID,
            "@partitionKey": partition_key_factory.create_partition_key_for_document(ItemType.WEBSITE_SCAN, WEBSITE_ID),
            "@itemType": "websiteScan",
        }
        assert converter == WebsiteScan.model_validate

    def test_get_scans_for_website_yields_models(self, guid_generator, partition_key_factory):
        scan = {
            "id": guid_generator.create_guid_from_base_guid(WEBSITE_ID),
            "itemType": "websiteScan",
            "websiteId": WEBSITE_ID,
            "scanType": "a11y",
            "scanFrequency": "0 0 * * *",
            "scanStatus": "fail",
        }
        query_client = FakeQueryClient({None: ok_page([scan], "tok1"), "tok1": ok_page([scan])})
        provider = WebsiteScanProvider(query_client, guid_generator, partition_key_factory)

        scans = list(provider.get_scans_for_website(WEBSITE_ID))

        assert len(scans) == 2
        assert all(s.scan_status == ScanStatus.FAIL for s in scans)
