#!/usr/bin/env python3
"""
Tag Compiler

Resolves tag definitions against the registry ID mapping and writes the
combined tag packet.

Path structure of a tag definition (relative to the tag root):
    damage_type/bypasses_armor.json   -> registry minecraft:damage_type, tag minecraft:bypasses_armor
    block/mineable/pickaxe.json       -> registry minecraft:block, tag minecraft:mineable/pickaxe

Tag file format:
    {"values": ["minecraft:fall", "#minecraft:is_fire", ...]}

Only direct entry references are resolved. References to other tags ("#...")
are dropped rather than expanded, so a tag that is built purely from other
tags compiles to an empty ID list.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import List, Mapping, Optional, Tuple

from ..constants import DEFINITION_SUFFIX, INDIRECT_REFERENCE_MARKER, TAG_PACKET_FILENAME
from ..serialization import build_tags_packet, TagTable
from ..utils import (
    log, logWarning, logDebug, namespaced, resource_id, relative_text_parts, iter_definition_files,
)


@dataclass
class TagStats:
    """Counters for one tag compilation"""
    files_scanned: int = 0
    files_skipped: int = 0
    tags: int = 0
    resolved: int = 0
    indirect: int = 0
    unresolved: int = 0
    malformed: int = 0


@dataclass
class TagResolution:
    """Result of resolving one tag file's values"""
    ids: List[int] = field(default_factory=list)
    indirect: int = 0
    unresolved: int = 0


def tag_identity(relative_path: PurePath, namespace: str) -> Optional[Tuple[str, str]]:
    """
    Derive (registry_id, tag_name) from a tag file path.

    Args:
        relative_path: File path relative to the tag root
        namespace: Namespace applied to registry and tag names

    Returns:
        Tuple of namespaced names, or None if the path has no tag identity
    """
    parts = relative_text_parts(relative_path)
    if parts is None or len(parts) < 2:
        return None

    tag_path = "/".join(parts[1:])
    if tag_path.endswith(DEFINITION_SUFFIX):
        tag_path = tag_path[:-len(DEFINITION_SUFFIX)]
    if not tag_path or tag_path.endswith("/"):
        return None

    return resource_id(parts[0], namespace), resource_id(tag_path, namespace)


def read_tag_values(tag_file: Path) -> Optional[list]:
    """
    Read the "values" list of a tag file.

    I/O errors propagate. A document that is not valid JSON, not an object,
    or has no list under "values" resolves to None so the caller can fall
    back to an empty tag.

    Args:
        tag_file: Path to the tag JSON file

    Returns:
        The raw values list, or None if the file is malformed
    """
    raw = Path(tag_file).read_bytes()

    try:
        document = json.loads(raw.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        logDebug(f"Unparseable tag file {tag_file}: {e}")
        return None

    if not isinstance(document, dict):
        logDebug(f"Tag file {tag_file} is not a JSON object")
        return None

    values = document.get('values')
    if not isinstance(values, list):
        logDebug(f"Tag file {tag_file} has no 'values' list")
        return None

    return values


def resolve_tag_values(values: list, entries: Mapping[str, int], namespace: str) -> TagResolution:
    """
    Resolve tag values to entry IDs.

    Order is preserved and duplicates are kept. Indirect references,
    unknown entries and non-string values are dropped.

    Args:
        values: Raw "values" list from a tag file
        entries: Entry -> ID map of the tag's registry
        namespace: Namespace for unqualified references

    Returns:
        TagResolution with the resolved IDs and drop counts
    """
    result = TagResolution()

    for value in values:
        if not isinstance(value, str):
            logDebug(f"Ignoring non-string tag value {value!r}")
            result.unresolved += 1
            continue

        if value.startswith(INDIRECT_REFERENCE_MARKER):
            logDebug(f"Skipping indirect reference {value}")
            result.indirect += 1
            continue

        entry_id = entries.get(namespaced(value, namespace))
        if entry_id is None:
            logDebug(f"Unresolved tag value {value}")
            result.unresolved += 1
            continue

        result.ids.append(entry_id)

    return result


def collect_tags(tag_root: Path, registry_map: Mapping[str, Mapping[str, int]],
                 namespace: str, stats: Optional[TagStats] = None) -> TagTable:
    """
    Build registry -> tag -> IDs from every tag file under tag_root.

    Tag files under a registry missing from registry_map are skipped.

    Args:
        tag_root: Root of the tag subtree
        registry_map: registry -> entry -> ID from the registry compiler
        namespace: Namespace for registry, tag and reference names
        stats: Optional counters updated in place

    Returns:
        registry -> tag name -> resolved IDs
    """
    stats = stats if stats is not None else TagStats()
    tags: TagTable = {}
    tag_root = Path(tag_root)

    for relative_path in iter_definition_files(tag_root):
        stats.files_scanned += 1

        identity = tag_identity(relative_path, namespace)
        if identity is None:
            stats.files_skipped += 1
            logDebug(f"No tag identity for {relative_path!r}, skipped")
            continue

        registry_id, tag_name = identity
        entries = registry_map.get(registry_id)
        if entries is None:
            stats.files_skipped += 1
            logDebug(f"Unknown registry {registry_id} for tag {tag_name}, skipped")
            continue

        values = read_tag_values(tag_root / relative_path)
        if values is None:
            stats.malformed += 1
            values = []

        resolution = resolve_tag_values(values, entries, namespace)
        stats.tags += 1
        stats.resolved += len(resolution.ids)
        stats.indirect += resolution.indirect
        stats.unresolved += resolution.unresolved

        tags.setdefault(registry_id, {})[tag_name] = resolution.ids

    return tags


def compile_tags(tag_root: Path, registry_map: Mapping[str, Mapping[str, int]],
                 output_dir: Path, namespace: str = "minecraft") -> TagTable:
    """
    Resolve all tags and write the combined tag packet.

    Args:
        tag_root: Root of the tag subtree
        registry_map: registry -> entry -> ID from compile_registries
        output_dir: Existing output directory
        namespace: Namespace for registry, tag and reference names

    Returns:
        registry -> tag name -> resolved IDs
    """
    tag_root = Path(tag_root)
    stats = TagStats()

    if tag_root.is_dir():
        tags = collect_tags(tag_root, registry_map, namespace, stats)
    else:
        logWarning(f"Tag directory not found: {tag_root}, writing empty tag packet")
        tags = {}

    output_path = Path(output_dir) / TAG_PACKET_FILENAME
    packet = build_tags_packet(tags)
    output_path.write_bytes(packet)

    log(f"  Tag files: {stats.files_scanned:,} ({stats.files_skipped} skipped, {stats.malformed} malformed)")
    log(f"  Tags: {stats.tags:,} across {len(tags)} registries")
    log(f"  References: {stats.resolved:,} resolved, {stats.indirect:,} indirect, "
        f"{stats.unresolved:,} unresolved")
    logDebug(f"{output_path.name}: {len(packet)} bytes")

    return tags
