"""
Tags Package

Resolves tag definitions to registry entry IDs and writes the tag packet.
"""

from .tag_compiler import (
    TagStats,
    TagResolution,
    tag_identity,
    read_tag_values,
    resolve_tag_values,
    collect_tags,
    compile_tags,
)
