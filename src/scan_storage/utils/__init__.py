"""Identifier and hashing utilities."""

from scan_storage.utils.guid_generator import GuidGenerator
from scan_storage.utils.hash_generator import DB_HASH_BUCKET_COUNT, HashGenerator

__all__ = ["DB_HASH_BUCKET_COUNT", "GuidGenerator", "HashGenerator"]
