"""
Serialization Package

Binary packet bodies written by the builder:
- Registry packets, one per registry (registry_packet)
- Combined tag packet (tag_packet)
"""

from .registry_packet import build_registry_packet
from .tag_packet import build_tags_packet, TagTable
