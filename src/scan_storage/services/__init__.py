"""Service layer: document providers and query streaming."""

from scan_storage.services.page_provider import PageProvider
from scan_storage.services.page_scan_provider import PageScanProvider
from scan_storage.services.paged_query_stream import DocumentQueryClient, PagedQueryStream, get_paged_query_stream
from scan_storage.services.website_provider import WebsiteProvider
from scan_storage.services.website_scan_provider import WebsiteScanProvider

__all__ = [
    "DocumentQueryClient",
    "PageProvider",
    "PageScanProvider",
    "PagedQueryStream",
    "WebsiteProvider",
    "WebsiteScanProvider",
    "get_paged_query_stream",
]
