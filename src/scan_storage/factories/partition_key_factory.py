"""Partition key derivation for sharded storage documents."""

from scan_storage.models.documents import ItemType
from scan_storage.utils.guid_generator import GuidGenerator
from scan_storage.utils.hash_generator import HashGenerator


class PartitionKeyFactory:
    """Derives partition keys from an item type and a document GUID.

    Only the GUID node takes part in the hash, so documents whose ids were
    derived from the same base id land in the same partition for a given
    item type.
    """

    def __init__(
        self,
        hash_generator: HashGenerator | None = None,
        guid_generator: GuidGenerator | None = None,
    ) -> None:
        self.hash_generator = hash_generator or HashGenerator()
        self.guid_generator = guid_generator or GuidGenerator()

    def create_partition_key_for_document(self, document_type: ItemType | str, document_guid: str) -> str:
        """Create the partition key for a document.

        Args:
            document_type: Item type, used as the key prefix
            document_guid: Document id, or the id of the document it derives from

        Returns:
            Partition key value

        Raises:
            InvalidIdentifierError: If document_guid is not a well-formed GUID
        """
        node = self.guid_generator.get_guid_node(document_guid)
        return self.hash_generator.get_db_hash_bucket(document_type, node)
