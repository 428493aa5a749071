"""Time-based GUID generation with a shareable node segment."""

import re
import secrets
import uuid

from scan_storage.exceptions import InvalidIdentifierError

_GUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)

# Multicast bit marks a node as random rather than a hardware address (RFC 4122 4.5)
_RANDOM_NODE_FLAG = 0x010000000000


class GuidGenerator:
    """Creates version 1 GUIDs and extracts their node segment.

    The node is the last 12 hex digits of a GUID. Ids created with
    create_guid_from_base_guid keep the node of their base id, which is
    what lets related documents share a partition.
    """

    def create_guid(self, node: int | None = None) -> str:
        """Create a new GUID.

        Args:
            node: 48-bit node value. If None, a random node is used.

        Returns:
            GUID string in canonical lowercase form
        """
        if node is None:
            node = secrets.randbits(48) | _RANDOM_NODE_FLAG
        return str(uuid.uuid1(node=node))

    def create_guid_from_base_guid(self, base_guid: str) -> str:
        """Create a new GUID sharing the node of base_guid."""
        node = self.get_guid_node(base_guid)
        return self.create_guid(node=int(node, 16))

    def get_guid_node(self, guid: str) -> str:
        """Get the node segment of a GUID.

        Args:
            guid: GUID in canonical 8-4-4-4-12 form

        Returns:
            Node as 12 lowercase hex characters

        Raises:
            InvalidIdentifierError: If guid is not a well-formed GUID
        """
        if not self.is_valid_guid(guid):
            raise InvalidIdentifierError(guid)
        return guid[-12:].lower()

    def is_valid_guid(self, guid: str) -> bool:
        return isinstance(guid, str) and _GUID_PATTERN.match(guid) is not None
