"""
Parsers for the builder's binary output.

- parse_registry_packet: Decode a <registry>.bin file
- parse_tags_packet: Decode packet_tags.bin
"""

from .packet_reader import RegistryPacket, parse_registry_packet, parse_tags_packet

__all__ = [
    'RegistryPacket',
    'parse_registry_packet',
    'parse_tags_packet',
]
