"""Configuration package."""

from scan_storage.config.storage_config import StorageConfig, configure_logging, get_storage_config

__all__ = ["StorageConfig", "configure_logging", "get_storage_config"]
