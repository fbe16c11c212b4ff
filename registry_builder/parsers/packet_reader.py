"""
Packet readers for the builder's output files.

Decodes registry packets and the combined tag packet back into Python
structures. Used by the inspection tool and to verify written output.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from ..constants import NO_ENTRY_DATA
from ..utils import read_string, read_varint


@dataclass
class RegistryPacket:
    """A decoded registry packet."""
    registry_id: str
    entries: List[str] = field(default_factory=list)

    def entry_ids(self) -> Dict[str, int]:
        """Entry -> ID by position in the packet."""
        return {entry: index for index, entry in enumerate(self.entries)}


def parse_registry_packet(data: bytes) -> RegistryPacket:
    """
    Decode a registry packet.

    Args:
        data: Complete packet bytes

    Returns:
        RegistryPacket with entries in packet order

    Raises:
        ValueError: On truncation, a set "has data" flag, or trailing bytes
    """
    registry_id, offset = read_string(data, 0)
    count, offset = read_varint(data, offset)

    packet = RegistryPacket(registry_id)
    for _ in range(count):
        entry_id, offset = read_string(data, offset)
        if offset >= len(data):
            raise ValueError(f"Missing data flag for entry {entry_id}")
        if data[offset] != NO_ENTRY_DATA:
            raise ValueError(f"Entry {entry_id} has unsupported data flag 0x{data[offset]:02x}")
        offset += 1
        packet.entries.append(entry_id)

    if offset != len(data):
        raise ValueError(f"{len(data) - offset} trailing bytes after registry {registry_id}")

    return packet


def parse_tags_packet(data: bytes) -> Dict[str, Dict[str, List[int]]]:
    """
    Decode the combined tag packet.

    Args:
        data: Complete packet bytes

    Returns:
        registry -> tag name -> entry IDs, in packet order

    Raises:
        ValueError: On truncation or trailing bytes
    """
    tags: Dict[str, Dict[str, List[int]]] = {}

    registry_count, offset = read_varint(data, 0)
    for _ in range(registry_count):
        registry_name, offset = read_string(data, offset)
        tag_count, offset = read_varint(data, offset)

        registry_tags = tags.setdefault(registry_name, {})
        for _ in range(tag_count):
            tag_name, offset = read_string(data, offset)
            id_count, offset = read_varint(data, offset)

            ids = []
            for _ in range(id_count):
                entry_id, offset = read_varint(data, offset)
                ids.append(entry_id)
            registry_tags[tag_name] = ids

    if offset != len(data):
        raise ValueError(f"{len(data) - offset} trailing bytes after tag packet")

    return tags
