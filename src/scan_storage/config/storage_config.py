"""Configuration management for the scan storage layer."""

import logging
import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def _get_env_file_path() -> str:
    """Get the path to the .env file.

    Checks for ENV_FILE environment variable first, then defaults to
    .env in the project root.

    Returns:
        Path to the .env file
    """
    env_file = os.getenv("ENV_FILE")
    if env_file:
        return env_file

    # This file is in src/scan_storage/config/storage_config.py
    # So we go up 4 levels to get to the project root
    current_file = Path(__file__)
    project_dir = current_file.parent.parent.parent.parent
    default_env_file = project_dir / ".env"
    return str(default_env_file)


class StorageConfig(BaseSettings):
    """Storage settings from environment variables."""

    # Cosmos DB
    azure_cosmosdb_endpoint: str | None = None
    azure_cosmosdb_key: str | None = None
    cosmos_db: str = "onedhp"
    website_repo_container: str = "websiteData"
    scan_metadata_repo_container: str = "scanMetadata"

    # Page size hint for paged queries; None lets the service decide
    query_max_item_count: int | None = None

    # Optimistic concurrency retries for merge writes
    merge_max_retries: int = 3

    log_level: str = "info"

    model_config = SettingsConfigDict(
        env_file=_get_env_file_path(),
        case_sensitive=False,
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
    )


def get_storage_config() -> StorageConfig:
    """Get storage configuration.

    Returns:
        StorageConfig instance
    """
    return StorageConfig()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for hosts embedding the storage layer.

    Args:
        level: Log level name. If None, uses the configured log_level.
    """
    if level is None:
        level = get_storage_config().log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
