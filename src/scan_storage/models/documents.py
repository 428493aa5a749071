"""Storage document Pydantic models."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ItemType(str, Enum):
    """Document kind tag, also used as the partition key prefix."""

    WEBSITE = "website"
    PAGE = "page"
    WEBSITE_SCAN = "websiteScan"
    PAGE_SCAN = "pageScan"


class PartitionKey(str, Enum):
    """Static partition keys for documents that are not sharded by id."""

    WEBSITE_DOCUMENTS = "websiteDocuments"
    PAGE_DOCUMENTS = "pageDocuments"
    WEBSITE_SCAN_DOCUMENTS = "websiteScanDocuments"
    PAGE_SCAN_DOCUMENTS = "pageScanDocuments"


class ScanType(str, Enum):
    """Scanner kind."""

    A11Y = "a11y"
    COOKIES = "cookies"


class ScanStatus(str, Enum):
    """Scan outcome."""

    PASS = "pass"
    FAIL = "fail"
    ERROR = "error"
    PENDING = "pending"


class ReportFormat(str, Enum):
    """Page report format."""

    SARIF = "sarif"
    HTML = "html"
    CONSOLIDATED_HTML = "consolidated.html"


class ReportData(BaseModel):
    """Reference to a generated scan report."""

    report_id: str = Field(..., alias="reportId")
    format: ReportFormat
    href: str

    model_config = ConfigDict(populate_by_name=True)


class StorageDocument(BaseModel):
    """Fields shared by every stored document."""

    id: str = Field(..., description="Document ID")
    item_type: ItemType = Field(..., alias="itemType", description="Document kind")
    partition_key: str | None = Field(None, alias="partitionKey", description="Partition key value")

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_document(self) -> dict[str, Any]:
        """Serialize to the stored (camelCase) document shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def to_document_dict(value: BaseModel | dict[str, Any]) -> dict[str, Any]:
    """Convert a model or a partial document dict to the stored document shape.

    Dicts are expected to use stored (camelCase) field names already.
    """
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    return dict(value)


class Website(StorageDocument):
    """Website registered for scanning."""

    item_type: ItemType = Field(ItemType.WEBSITE, alias="itemType")
    name: str
    base_url: str = Field(..., alias="baseUrl")
    priority: int = 0
    discovery_patterns: list[str] = Field(default_factory=list, alias="discoveryPatterns")
    known_pages: list[str] = Field(default_factory=list, alias="knownPages")
    scanners: list[ScanType] = Field(default_factory=list)
    domain_id: str | None = Field(None, alias="domainId")
    owners: list[str] | None = None
    compliant: bool = False
    enable_crawler: bool = Field(False, alias="enableCrawler")
    deleted: bool = False
    no_banner: bool = Field(False, alias="noBanner")
    service_tree_id: str | None = Field(None, alias="serviceTreeId")
    notes: str | None = None


class Page(StorageDocument):
    """Single URL belonging to a website. Shares the website's partition."""

    item_type: ItemType = Field(ItemType.PAGE, alias="itemType")
    website_id: str = Field(..., alias="websiteId")
    url: str
    last_scan_date: datetime | None = Field(None, alias="lastScanDate")


class WebsiteScan(StorageDocument):
    """Scan of a full website for one scan type."""

    item_type: ItemType = Field(ItemType.WEBSITE_SCAN, alias="itemType")
    website_id: str = Field(..., alias="websiteId")
    scan_type: ScanType = Field(..., alias="scanType")
    scan_frequency: str = Field(..., alias="scanFrequency", description="Cron expression")
    scan_status: ScanStatus = Field(ScanStatus.PENDING, alias="scanStatus")
    priority: int = 0
    reports: list[ReportData] | None = None


class PageScan(StorageDocument):
    """Scan of a single page. Unique per (pageId, websiteScanId)."""

    item_type: ItemType = Field(ItemType.PAGE_SCAN, alias="itemType")
    website_scan_id: str = Field(..., alias="websiteScanId")
    page_id: str = Field(..., alias="pageId")
    priority: int = 0
    scan_status: ScanStatus = Field(ScanStatus.PENDING, alias="scanStatus")
    start_date: datetime | None = Field(None, alias="startDate")
    completed_timestamp: int | None = Field(None, alias="completedTimestamp")
    results_blob_id: str | None = Field(None, alias="resultsBlobId")
    reports: list[ReportData] | None = None
    retry_count: int = Field(0, alias="retryCount")
    scan_error: str | None = Field(None, alias="scanError")
