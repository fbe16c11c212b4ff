#!/usr/bin/env python3
"""
Registry Packet Builder

Creates the body of a registry-synchronization packet for one registry.
"""

import io
from typing import Iterable

from ..constants import NO_ENTRY_DATA
from ..utils import write_string, write_varint


def build_registry_packet(registry_id: str, entries: Iterable[str]) -> bytes:
    """
    Create a registry packet

    Structure:
    - String registry_id
    - VarInt entry_count
    - repeated:
        - String entry_id
        - u8 has_data (always 0x00)

    Entries are written in the order given; the entry's position is its ID.

    Args:
        registry_id: Namespaced registry name
        entries: Namespaced entry names, already sorted

    Returns:
        Packet bytes
    """
    entries = list(entries)
    buffer = io.BytesIO()

    write_string(buffer, registry_id)
    write_varint(buffer, len(entries))

    for entry_id in entries:
        write_string(buffer, entry_id)
        buffer.write(bytes((NO_ENTRY_DATA,)))

    return buffer.getvalue()
