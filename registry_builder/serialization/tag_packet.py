#!/usr/bin/env python3
"""
Tag Packet Builder

Creates the body of the combined tag-synchronization packet.
"""

import io
from typing import Dict, List, Mapping, Sequence

from ..utils import write_string, write_varint

# registry -> tag name -> resolved entry IDs
TagTable = Dict[str, Dict[str, List[int]]]


def build_tags_packet(tags: Mapping[str, Mapping[str, Sequence[int]]]) -> bytes:
    """
    Create the tag packet

    Structure:
    - VarInt registry_count
    - repeated (registries sorted by name):
        - String registry_name
        - VarInt tag_count
        - repeated (tags sorted by name):
            - String tag_name
            - VarInt id_count
            - repeated VarInt id (reference order)

    Args:
        tags: registry -> tag name -> entry IDs

    Returns:
        Packet bytes
    """
    buffer = io.BytesIO()

    write_varint(buffer, len(tags))

    for registry_name in sorted(tags):
        registry_tags = tags[registry_name]
        write_string(buffer, registry_name)
        write_varint(buffer, len(registry_tags))

        for tag_name in sorted(registry_tags):
            ids = registry_tags[tag_name]
            write_string(buffer, tag_name)
            write_varint(buffer, len(ids))
            for entry_id in ids:
                write_varint(buffer, entry_id)

    return buffer.getvalue()
