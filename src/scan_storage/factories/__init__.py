"""Factories package."""

from scan_storage.factories.partition_key_factory import PartitionKeyFactory

__all__ = ["PartitionKeyFactory"]
