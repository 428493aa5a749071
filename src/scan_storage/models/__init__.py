"""Storage models package."""

from scan_storage.models.documents import (
    ItemType,
    Page,
    PageScan,
    PartitionKey,
    ReportData,
    ReportFormat,
    ScanStatus,
    ScanType,
    StorageDocument,
    Website,
    WebsiteScan,
    to_document_dict,
)
from scan_storage.models.query import (
    CosmosOperationResponse,
    ParameterizedQuery,
    QueryDescriptor,
    QueryParameter,
    RawQuery,
    as_query_descriptor,
    ensure_success_status_code,
)

__all__ = [
    "CosmosOperationResponse",
    "ItemType",
    "Page",
    "PageScan",
    "ParameterizedQuery",
    "PartitionKey",
    "QueryDescriptor",
    "QueryParameter",
    "RawQuery",
    "ReportData",
    "ReportFormat",
    "ScanStatus",
    "ScanType",
    "StorageDocument",
    "Website",
    "WebsiteScan",
    "as_query_descriptor",
    "ensure_success_status_code",
    "to_document_dict",
]
