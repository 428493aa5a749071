"""Deterministic hashing for document ids and partition buckets."""

import hashlib
from enum import Enum

# Changing the bucket count re-shards every existing document
DB_HASH_BUCKET_COUNT = 1000


class HashGenerator:
    """SHA-256 based hashing. Stable across processes and hosts."""

    def generate_hash(self, *values: str) -> str:
        """Hash the values joined with '|'.

        Returns:
            Hex digest
        """
        seed = "|".join(values)
        return hashlib.sha256(seed.encode("utf-8")).hexdigest()

    def get_page_scan_document_id(self, page_id: str, website_scan_id: str) -> str:
        return self.generate_hash(page_id, website_scan_id)

    def get_db_hash_bucket(self, prefix: str | Enum, *values: str) -> str:
        return self.get_hash_bucket(prefix, DB_HASH_BUCKET_COUNT, *values)

    def get_hash_bucket(self, prefix: str | Enum, bucket_count: int, *values: str) -> str:
        """Map values to one of bucket_count buckets.

        Values are compared case-insensitively.

        Args:
            prefix: Bucket namespace, e.g. an item type
            bucket_count: Number of buckets
            values: Values to hash

        Returns:
            Bucket label in the form "{prefix}-{bucket}"
        """
        if bucket_count < 1:
            raise ValueError(f"bucket_count must be positive, got {bucket_count}")

        if isinstance(prefix, Enum):
            prefix = prefix.value
        digest = self.generate_hash(*(v.lower() for v in values))
        bucket = int(digest[:13], 16) % bucket_count
        return f"{prefix}-{bucket}"
